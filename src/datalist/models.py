from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator


class TypeTag(str, Enum):
    STRING = "string"
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    LIST = "list"
    SET = "set"


class MatchMode(str, Enum):
    EXACT = "exact"
    SUBSTRING = "substring"
    RE = "re"
    LESS_THAN = "less_than"
    LESS_THAN_OR_EQUAL = "less_than_or_equal"
    GREATER_THAN = "greater_than"
    GREATER_THAN_OR_EQUAL = "greater_than_or_equal"

    @classmethod
    def parse(cls, value: "MatchMode | str | None") -> "MatchMode":
        """Resolve a match mode, falling back to ``EXACT`` for empty or unknown input."""
        if isinstance(value, MatchMode):
            return value
        if not value:
            return cls.EXACT
        if value == "regex":
            return cls.RE
        try:
            return cls(value)
        except ValueError:
            return cls.EXACT


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class Schema(BaseModel):
    type: TypeTag
    elem: "Schema | None" = None

    @model_validator(mode="after")
    def _check_elem(self) -> "Schema":
        if self.is_collection and self.elem is None:
            raise ValueError(f"{self.type.value} schema requires an element schema")
        if not self.is_collection and self.elem is not None:
            raise ValueError(f"{self.type.value} schema cannot have an element schema")
        return self

    @property
    def is_collection(self) -> bool:
        return self.type in (TypeTag.LIST, TypeTag.SET)

    @property
    def is_sortable(self) -> bool:
        return not self.is_collection

    def scalar(self) -> "Schema":
        """Return the innermost non-collection schema."""
        node = self
        while node.elem is not None:
            node = node.elem
        return node


Schema.model_rebuild()  # necessary for recursive types


class Filter(BaseModel):
    key: str
    values: list[str] = Field(min_length=1)
    all: bool = False
    match_by: MatchMode = MatchMode.EXACT

    @field_validator("match_by", mode="before")
    @classmethod
    def _parse_match_by(cls, value: object) -> MatchMode:
        return MatchMode.parse(value if isinstance(value, (MatchMode, str)) else None)


class Sort(BaseModel):
    key: str
    direction: SortDirection = SortDirection.ASC


RecordSchema = dict[str, Schema]
