"""Common type definitions using TypedDict and dataclasses.

Provides structured types for Jira API responses consumed by the formatters
and for internal data structures such as pagination state.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, TypedDict


class FieldSchema(TypedDict, total=False):
    """
    Schema of a creatable field.

    Attributes:
        type: Field value type (string, array, user, option, ...)
        system: System field identifier for built-in fields
        custom: Custom field type for custom fields
    """

    type: str
    system: str
    custom: str


class FieldDescriptor(TypedDict, total=False):
    """
    One creatable/editable field on an issue type.

    Attributes:
        name: Display name
        key: Field key (falls back to fieldId, then to the map key)
        fieldId: Field identifier returned by the newer createmeta endpoint
        required: Whether the field must be set on creation
        schema: Field schema
        allowedValues: Optional list of permitted values
        defaultValue: Optional default value
    """

    name: str
    key: str
    fieldId: str
    required: bool
    schema: FieldSchema
    allowedValues: list[Any]
    defaultValue: Any


class IssueTypeMetadata(TypedDict, total=False):
    """A creatable issue type within a project."""

    id: str
    name: str
    description: str
    subtask: bool
    fields: dict[str, FieldDescriptor]


class CreateMetaProject(TypedDict, total=False):
    """Project entry of the legacy createmeta response."""

    id: str
    key: str
    name: str
    issuetypes: list[IssueTypeMetadata]


class ErrorCollection(TypedDict, total=False):
    """Validation errors attached to a transition or error response."""

    errorMessages: list[str]
    errors: dict[str, str]


class TransitionResult(TypedDict, total=False):
    """Transition status attached to a create-issue response."""

    status: int
    errorCollection: ErrorCollection


class CreateIssueResponse(TypedDict, total=False):
    """
    Response format of the create-issue call.

    Attributes:
        id: Numeric issue ID
        key: Issue key (e.g., PROJ-123)
        self: Canonical REST URL of the issue
        transition: Optional transition status
    """

    id: str
    key: str
    self: str
    transition: TransitionResult


@dataclass(frozen=True)
class ResponsePagination:
    """
    Page-state descriptor for any listable resource.

    Attributes:
        count: Number of items in this page
        has_more: Whether more items are available
        next_cursor: Offset or page token to request next (only when has_more)
        total: Total number of items, when the API reports it
    """

    count: int = 0
    has_more: bool = False
    next_cursor: str | None = None
    total: int | None = None

    @classmethod
    def from_offset(
        cls,
        start_at: int,
        count: int,
        total: int | None = None,
        is_last: bool | None = None,
    ) -> "ResponsePagination":
        """
        Build pagination state from Jira offset paging.

        Args:
            start_at: Offset of the first item of this page
            count: Number of items in this page
            total: Total number of items, if reported
            is_last: Explicit last-page flag, if reported

        Returns:
            ResponsePagination with next_cursor set when more results remain
        """
        if is_last is not None:
            has_more = not is_last
        elif total is not None:
            has_more = start_at + count < total
        else:
            has_more = False

        next_cursor = str(start_at + count) if has_more else None
        return cls(count=count, has_more=has_more, next_cursor=next_cursor, total=total)

    @classmethod
    def from_token(
        cls,
        count: int,
        next_page_token: str | None = None,
        is_last: bool | None = None,
    ) -> "ResponsePagination":
        """Build pagination state from Jira token paging (search/jql has no total)."""
        has_more = not is_last if is_last is not None else bool(next_page_token)
        next_cursor = next_page_token if has_more and next_page_token else None
        return cls(count=count, has_more=has_more, next_cursor=next_cursor)


@dataclass(frozen=True)
class SingleIssueTypeMeta:
    """Createmeta for one issue type: {fields, name, description?}."""

    name: str
    fields: Mapping[str, FieldDescriptor] | list[FieldDescriptor]
    description: str | None = None


@dataclass(frozen=True)
class LegacyProjectsMeta:
    """Legacy createmeta: {projects: [{name, key, issuetypes}]}."""

    projects: list[CreateMetaProject] = field(default_factory=list)


CreateMeta = SingleIssueTypeMeta | LegacyProjectsMeta


def parse_create_meta(raw: Mapping[str, Any] | CreateMeta) -> CreateMeta | None:
    """
    Resolve a createmeta response into one of its two shapes.

    A present (possibly empty) `fields` collection together with a `name`
    selects the single-type shape; a non-empty `projects` list selects the
    legacy shape. Returns None when neither is populated.
    """
    if isinstance(raw, (SingleIssueTypeMeta, LegacyProjectsMeta)):
        return raw

    fields = raw.get("fields")
    name = raw.get("name")
    if fields is not None and name:
        return SingleIssueTypeMeta(name=name, fields=fields, description=raw.get("description"))

    projects = raw.get("projects")
    if projects:
        return LegacyProjectsMeta(projects=list(projects))

    return None


def field_entries(
    fields: Mapping[str, FieldDescriptor] | Iterable[FieldDescriptor] | None,
) -> list[tuple[str, FieldDescriptor]]:
    """
    Normalise a field collection into ordered (field_id, descriptor) pairs.

    Accepts the mapping returned by the legacy endpoint and the list
    returned by the per-issue-type endpoint.
    """
    if not fields:
        return []
    if isinstance(fields, Mapping):
        return list(fields.items())
    return [
        (descriptor.get("fieldId") or descriptor.get("key") or str(index), descriptor)
        for index, descriptor in enumerate(fields)
    ]


def partition_fields(
    entries: Iterable[tuple[str, FieldDescriptor]],
) -> tuple[list[tuple[str, FieldDescriptor]], list[tuple[str, FieldDescriptor]]]:
    """Split field entries into (required, optional), preserving order."""
    required: list[tuple[str, FieldDescriptor]] = []
    optional: list[tuple[str, FieldDescriptor]] = []
    for entry in entries:
        if entry[1].get("required"):
            required.append(entry)
        else:
            optional.append(entry)
    return required, optional


@dataclass(frozen=True)
class JiraSiteConfig:
    """
    Atlassian site configuration for Jira operations.

    Attributes:
        site_name: Atlassian site name (the "mycompany" of mycompany.atlassian.net)
        default_project: Project key used when a tool is called without one
    """

    site_name: str
    default_project: str = ""

    @property
    def base_url(self) -> str:
        """
        Get the site base URL.

        Returns:
            Base URL in 'https://{site}.atlassian.net' format
        """
        return f"https://{self.site_name}.atlassian.net"
