"""Typed models for the resolver's JSON response body."""

from datetime import timedelta
from enum import IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Rcode(IntEnum):
    """DNS response codes carried in the ``Status`` field."""

    NOERROR = 0
    FORMERR = 1
    SERVFAIL = 2
    NXDOMAIN = 3
    NOTIMP = 4
    REFUSED = 5
    YXDOMAIN = 6
    YXRRSET = 7
    NXRRSET = 8
    NOTAUTH = 9
    NOTZONE = 10


class _ResolverModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class Question(_ResolverModel):
    """A single entry of the echoed question section."""

    name: str
    type: int


class ResourceRecord(_ResolverModel):
    """An answer or authority record.

    The resolver sends TTL as integer seconds and pydantic reads numbers into
    ``timedelta`` as seconds, so ``ttl`` needs no further scaling.
    """

    name: str
    type: int
    ttl: timedelta = Field(alias="TTL")
    data: str


class Response(_ResolverModel):
    """Decoded resolver response."""

    status: int = Field(alias="Status")
    tc: bool = Field(default=False, alias="TC")
    rd: bool = Field(default=False, alias="RD")
    ra: bool = Field(default=False, alias="RA")
    ad: bool = Field(default=False, alias="AD")
    cd: bool = Field(default=False, alias="CD")

    question: list[Question] = Field(default_factory=list, alias="Question")
    answer: list[ResourceRecord] = Field(default_factory=list, alias="Answer")
    authority: list[ResourceRecord] = Field(default_factory=list, alias="Authority")
    # Extension records come in varying shapes; keep the raw JSON values.
    additional: list[Any] = Field(default_factory=list, alias="Additional")

    edns_client_subnet: str = ""
    comment: str = Field(default="", alias="Comment")

    @property
    def ok(self) -> bool:
        return self.status == Rcode.NOERROR

    @property
    def rcode(self) -> Rcode | None:
        """Return the status as an ``Rcode``, or None for unlisted codes."""
        try:
            return Rcode(self.status)
        except ValueError:
            return None
