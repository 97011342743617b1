"""Object tables and the binding that wires bulk actions into a host screen."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import structlog

from ..actions.base import MissingObjectType
from ..actions.dispatcher import Dispatcher
from ..feedback.codec import decode, encode
from ..host import HookHost
from ..permissions import CapabilityOracle


logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class TableSpec:
    """Object type and host screen for one kind of list table."""

    object_type: str
    screen_template: str
    fixed_subtype: Optional[str] = None

    def screen_id(self, object_subtype: str) -> str:
        return self.screen_template.format(subtype=object_subtype)


class ObjectTable(Enum):
    """Closed set of list tables that accept bulk actions."""

    POST = TableSpec("post", "edit-{subtype}")
    USER = TableSpec("user", "users", fixed_subtype="user")
    TAXONOMY = TableSpec("term", "edit-{subtype}")
    COMMENT = TableSpec("comment", "edit-comments", fixed_subtype="comment")
    MEDIA = TableSpec("attachment", "upload", fixed_subtype="attachment")

    @property
    def object_type(self) -> str:
        return self.value.object_type

    def screen_id(self, object_subtype: str) -> str:
        return self.value.screen_id(object_subtype)

    def subtypes(self, object_subtypes: Union[str, Iterable[str], None]) -> List[str]:
        """Normalize the subtypes a registration call targets."""
        if object_subtypes is None:
            if self.value.fixed_subtype is None:
                raise ValueError(f"{self.name.lower()} bulk actions need an object subtype")
            return [self.value.fixed_subtype]
        if isinstance(object_subtypes, str):
            return [object_subtypes]
        return list(object_subtypes)


def resolve_table(table: Union[str, ObjectTable, None]) -> ObjectTable:
    """Look up a table by enum member, table name or object type.

    Raises:
        MissingObjectType: If no object type can be resolved
    """
    if isinstance(table, ObjectTable):
        return table
    if not table:
        raise MissingObjectType("Bulk action table must declare an object type.")

    wanted = str(table).lower()
    for member in ObjectTable:
        if wanted in (member.name.lower(), member.object_type):
            return member

    raise MissingObjectType(f"Unknown bulk action table: {table!r}")


class TableBinding:
    """Binds one (table, subtype) scope to the host's bulk action hooks."""

    def __init__(
        self,
        table: ObjectTable,
        object_subtype: str,
        dispatcher: Dispatcher,
        actor: CapabilityOracle,
        notice_hook: str = "admin_notices",
    ) -> None:
        """Initialize the binding.

        Args:
            table: Table the scope belongs to
            object_subtype: Post type, taxonomy or fixed subtype
            dispatcher: Dispatcher used for menu and submission
            actor: Capability oracle for the current actor
            notice_hook: Host action on which notices are rendered
        """
        if not table.object_type:
            raise MissingObjectType(f"Table {table.name} does not define an object type.")

        self.table = table
        self.object_type = table.object_type
        self.object_subtype = object_subtype
        self.dispatcher = dispatcher
        self.actor = actor
        self.notice_hook = notice_hook

    @property
    def screen_id(self) -> str:
        return self.table.screen_id(self.object_subtype)

    def load_hooks(self, host: HookHost) -> None:
        """Register the menu, submission and notice callbacks with the host."""
        host.add_filter(f"bulk_actions-{self.screen_id}", self.register_bulk_actions)
        host.add_filter(f"handle_bulk_actions-{self.screen_id}", self.handle_bulk_action)
        host.add_action(self.notice_hook, self.display_admin_notice)

        logger.info(
            "Loaded bulk action hooks",
            object_type=self.object_type,
            object_subtype=self.object_subtype,
            screen=self.screen_id,
        )

    def register_bulk_actions(self, bulk_actions: Mapping[str, str]) -> Dict[str, str]:
        """Add the permitted actions to the host's existing menu."""
        menu = dict(bulk_actions)
        menu.update(
            self.dispatcher.list_available(self.object_type, self.object_subtype, self.actor)
        )
        return menu

    def handle_bulk_action(self, redirect_to: str, doaction: str, object_ids: Iterable[Any]) -> str:
        """Run the chosen action and return the redirect target."""
        outcome = self.dispatcher.dispatch(
            self.object_type, self.object_subtype, doaction, object_ids, self.actor
        )
        return encode(outcome, redirect_to)

    def display_admin_notice(
        self, query: Union[str, Mapping[str, Any]], screen_id: Optional[str] = None
    ) -> Optional[str]:
        """Render the notice for a signal carried by the current request.

        Args:
            query: Query fields of the current request, or its URL
            screen_id: Screen being rendered; other screens render nothing

        Returns:
            Notice markup, or None
        """
        if screen_id is not None and screen_id != self.screen_id:
            return None

        actions = self.dispatcher.registry.list(self.object_type, self.object_subtype)
        notice = decode(query, actions)
        if notice is None:
            return None
        return notice.to_html()
