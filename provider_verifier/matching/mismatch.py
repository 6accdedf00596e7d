from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class BaseMismatch(BaseModel):
    """Common base of the mismatch kinds. Mismatches are immutable values."""

    model_config = ConfigDict(frozen=True)


class StatusMismatch(BaseMismatch):
    kind: Literal["status"] = "status"
    expected: int = Field()
    actual: int = Field()


class HeaderMismatch(BaseMismatch):
    kind: Literal["header"] = "header"
    name: str = Field()
    expected: str = Field()
    actual: Optional[str] = Field(default=None)
    description: str = Field()


class BodyTypeMismatch(BaseMismatch):
    kind: Literal["body_type"] = "body_type"
    expected: str = Field()
    actual: Optional[str] = Field(default=None)


class BodyMismatch(BaseMismatch):
    kind: Literal["body"] = "body"
    path: str = Field()
    expected: Any = Field(default=None)
    actual: Any = Field(default=None)
    description: str = Field()


Mismatch = Annotated[
    Union[StatusMismatch, HeaderMismatch, BodyTypeMismatch, BodyMismatch],
    Field(discriminator="kind"),
]
