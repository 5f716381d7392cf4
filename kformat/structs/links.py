"""
Links of the outgoing objects and the per-link authorization decisions.

On the wire, the links are a plain mapping of names to URLs, with a special
marker for the links that exist in principle but are prohibited by the schema.
An absent key means that the link is not offered at all.

Internally, the decisions are explicit tagged values, and they are converted
to the wire form only when applied to the link set (see `apply_decisions`).
"""
import dataclasses
import enum
from typing import Mapping, MutableMapping, Optional

# The wire form of the links: names to URLs (or to the "blocked" marker).
LinkSet = MutableMapping[str, str]

BLOCKED = 'blocked'
""" The wire marker of a link prohibited by the schema regardless of grants. """

VIEW = 'view'
UPDATE = 'update'
REMOVE = 'remove'
PATCH = 'patch'


class Verdict(enum.Enum):
    KEEP = 'keep'          # leave the link as it is, present or absent
    EXPOSE = 'expose'      # set the link to a specific URL
    BLOCK = 'block'        # set the link to the "blocked" marker
    OMIT = 'omit'          # remove the link if present


@dataclasses.dataclass(frozen=True)
class Decision:
    verdict: Verdict
    url: Optional[str] = None

    def __post_init__(self) -> None:
        if self.verdict is Verdict.EXPOSE and not self.url:
            raise ValueError("Exposed links must have a URL.")
        if self.verdict is not Verdict.EXPOSE and self.url is not None:
            raise ValueError("Only exposed links can have a URL.")


KEEP = Decision(Verdict.KEEP)
BLOCK = Decision(Verdict.BLOCK)
OMIT = Decision(Verdict.OMIT)


def expose(url: str) -> Decision:
    return Decision(Verdict.EXPOSE, url)


@dataclasses.dataclass(frozen=True)
class ManagedLink:
    """
    A link that is controlled by the access checks.

    Each one is guarded by an API verb (for the access checks) and
    by an HTTP method (for the schema's prohibitions).
    """
    name: str
    verb: str
    method: str


MANAGED_LINKS = (
    ManagedLink(VIEW, 'get', 'GET'),
    ManagedLink(UPDATE, 'update', 'PUT'),
    ManagedLink(REMOVE, 'delete', 'DELETE'),
    ManagedLink(PATCH, 'patch', 'PATCH'),
)


def apply_decisions(
        links: LinkSet,
        decisions: Mapping[str, Decision],
        *,
        blocked: str = BLOCKED,
) -> None:
    """
    Convert the decisions to the wire form and store them into the links.
    """
    for name, decision in decisions.items():
        if decision.verdict is Verdict.KEEP:
            pass
        elif decision.verdict is Verdict.EXPOSE and decision.url:
            links[name] = decision.url
        elif decision.verdict is Verdict.BLOCK:
            links[name] = blocked
        else:
            links.pop(name, None)
