from sqlalchemy import JSON, Text
from sqlalchemy.dialects.postgresql import ARRAY

# text[] on PostgreSQL (the production schema); JSON list elsewhere (SQLite in dev/tests).
StringList = JSON().with_variant(ARRAY(Text), "postgresql")
