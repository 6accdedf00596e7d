from typing import Any, Dict, List, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field


def get_header(headers: Mapping[str, str], name: str) -> Optional[str]:
    """Looks up a header value by name, ignoring case."""
    if name in headers:
        return headers[name]
    lowered = name.lower()
    for key, value in headers.items():
        if key.lower() == lowered:
            return value
    return None


class MatchingRule(BaseModel):
    """How a value at one body path is compared.

    `equality` (the default) requires equal values, `type` only requires the same
    JSON type, `regex` requires the actual value's string form to fully match
    `regex`, and `include` requires it to contain `value`.
    """

    model_config = ConfigDict(frozen=True)

    match: Literal["equality", "type", "regex", "include"] = Field(default="equality")
    regex: Optional[str] = Field(default=None)
    value: Optional[str] = Field(default=None)


class ExpectedRequest(BaseModel):
    """The request recorded for an interaction."""

    model_config = ConfigDict(frozen=True)

    method: str = Field(default="GET")
    path: str = Field(default="/")
    query: Dict[str, List[str]] = Field(default_factory=dict)
    headers: Dict[str, str] = Field(default_factory=dict)
    body: Optional[Any] = Field(default=None)
    content_type: Optional[str] = Field(default=None)


class ExpectedResponse(BaseModel):
    """The response the consumer expects for an interaction.

    Attributes:
        status: Expected status code, compared exactly.
        headers: Expected headers. Headers only present in the actual response are ignored.
        body: Expected body. `None` means the body is not checked.
        content_type: Declared content type of the body, overriding the Content-Type header.
        header_rules: Header name to a regex the actual value must fully match.
        body_rules: Body path (e.g. `items[0].id`) to the rule used at that path.
        strict: If set, keys present in actual objects but not expected are mismatches.
    """

    model_config = ConfigDict(frozen=True)

    status: int = Field(default=200)
    headers: Dict[str, str] = Field(default_factory=dict)
    body: Optional[Any] = Field(default=None)
    content_type: Optional[str] = Field(default=None)
    header_rules: Dict[str, str] = Field(default_factory=dict)
    body_rules: Dict[str, MatchingRule] = Field(default_factory=dict)
    strict: bool = Field(default=False)

    @property
    def has_body(self) -> bool:
        return self.body is not None


class ActualResponse(BaseModel):
    """A response received from the provider."""

    model_config = ConfigDict(frozen=True)

    status: int = Field()
    headers: Dict[str, str] = Field(default_factory=dict)
    body: Optional[str] = Field(default=None)
