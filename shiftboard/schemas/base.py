from typing import ClassVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CreateSchema(BaseModel):
    """
    Base for the creatable subsets.

    Keys are accepted in camelCase (the wire form) or snake_case (the column
    form). Anything not declared, including server-assigned fields such as
    `id`, `verified`, `status` and `createdAt`, is dropped.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    # Fields written to the normalized record even when the client left them out.
    always_dump: ClassVar[tuple[str, ...]] = ()

    def normalized(self) -> dict:
        data = self.model_dump(exclude_unset=True)
        for name in self.always_dump:
            data.setdefault(name, getattr(self, name))
        return data


class ReadSchema(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
