"""Application wiring: registration helpers and two-phase activation."""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

import structlog

from .actions import ActionRegistry, Dispatcher, RegistrationClosed
from .config import BulkActionSettings
from .host import HookHost
from .permissions import CapabilityOracle
from .tables import ObjectTable, TableBinding, resolve_table
from .utils import setup_logging


logger = structlog.get_logger(__name__)

__version__ = "0.1.0"

Subtypes = Union[str, Iterable[str]]
ActionsConfig = Mapping[Any, Any]


class BulkActionsApp:
    """Owns the registry and dispatcher and wires them into a host.

    Registration helpers may be called any number of times while the app is
    being built. ``activate`` then loads the hooks of every binding once;
    later registrations raise :class:`RegistrationClosed`.
    """

    def __init__(
        self,
        actor: CapabilityOracle,
        settings: Optional[BulkActionSettings] = None,
        registry: Optional[ActionRegistry] = None,
    ) -> None:
        """Initialize the application.

        Args:
            actor: Capability oracle for the current actor
            settings: Settings, read from the environment when omitted
            registry: Registry to share, created when omitted
        """
        self.settings = settings or BulkActionSettings()
        self.actor = actor
        self.registry = registry or ActionRegistry(self.settings.default_capability)
        self.dispatcher = Dispatcher(
            self.registry,
            identifier_policy=self.settings.identifier_policy,
            metrics_enabled=self.settings.metrics_enabled,
        )
        self._bindings: Dict[Tuple[ObjectTable, str], TableBinding] = {}
        self._active = False

    @property
    def bindings(self) -> List[TableBinding]:
        """Bindings in the order their scopes were first registered."""
        return list(self._bindings.values())

    @property
    def is_active(self) -> bool:
        return self._active

    def register_bulk_actions(
        self,
        table: Union[str, ObjectTable],
        object_subtypes: Optional[Subtypes],
        actions: ActionsConfig,
    ) -> List[TableBinding]:
        """Register actions for a table, once per subtype.

        Repeated calls for a scope add to its actions and reuse its binding,
        so each scope is wired into the host exactly once.

        Args:
            table: Table member, table name or object type
            object_subtypes: Subtype(s); None for tables with a fixed subtype
            actions: Mapping of action key to partial definition

        Returns:
            Bindings of the scopes this call registered into
        """
        if self._active:
            raise RegistrationClosed(
                "Bulk actions must be registered before the hooks are activated."
            )

        member = resolve_table(table)
        bindings = []
        for object_subtype in member.subtypes(object_subtypes):
            self.registry.add_actions(member.object_type, object_subtype, actions)

            binding = self._bindings.get((member, object_subtype))
            if binding is None:
                binding = TableBinding(
                    member,
                    object_subtype,
                    self.dispatcher,
                    self.actor,
                    notice_hook=self.settings.notice_hook,
                )
                self._bindings[(member, object_subtype)] = binding
            bindings.append(binding)

        return bindings

    def register_post_bulk_actions(self, post_types: Subtypes, actions: ActionsConfig) -> List[TableBinding]:
        return self.register_bulk_actions(ObjectTable.POST, post_types, actions)

    def register_user_bulk_actions(self, actions: ActionsConfig) -> List[TableBinding]:
        return self.register_bulk_actions(ObjectTable.USER, None, actions)

    def register_taxonomy_bulk_actions(self, taxonomies: Subtypes, actions: ActionsConfig) -> List[TableBinding]:
        return self.register_bulk_actions(ObjectTable.TAXONOMY, taxonomies, actions)

    def register_comment_bulk_actions(self, actions: ActionsConfig) -> List[TableBinding]:
        return self.register_bulk_actions(ObjectTable.COMMENT, None, actions)

    def register_media_bulk_actions(self, actions: ActionsConfig) -> List[TableBinding]:
        return self.register_bulk_actions(ObjectTable.MEDIA, None, actions)

    def activate(self, host: HookHost) -> None:
        """Load the hooks of every binding into the host.

        Args:
            host: Host framework receiving the callbacks
        """
        if self._active:
            logger.warning("Bulk action hooks already activated")
            return

        for binding in self._bindings.values():
            binding.load_hooks(host)

        self._active = True
        logger.info(
            "Activated bulk action hooks",
            bindings=len(self._bindings),
            **self.registry.get_stats(),
        )


def create_app(
    actor: CapabilityOracle,
    settings: Optional[BulkActionSettings] = None,
) -> BulkActionsApp:
    """Configure logging from settings and build an application."""
    settings = settings or BulkActionSettings()
    setup_logging(settings.log_level, settings.log_format)

    logger.info("Starting bulk actions", version=__version__)
    return BulkActionsApp(actor, settings=settings)
