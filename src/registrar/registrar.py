"""Discovery-driven registration of component types.

A :class:`Registrar` builds its loader registry and validates the scanned
descriptors once, in :meth:`Registrar.initialize`. Afterwards it can register
components any number of times, either everything marked for startup
(:meth:`Registrar.on_start_register`) or a named group
(:meth:`Registrar.register_by_tag`). Each call instantiates the matching
components again.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Optional

from registrar.config import OnStartPolicy
from registrar.descriptors import DescriptorTable, LoaderInfo, RegisterTag
from registrar.domain import RegisterOnStart, TypeRef, qualified_name
from registrar.errors import RegistrarStateError, UnavailableLoaderError
from registrar.loader_registry import LoaderRegistry, build_loader_registry
from registrar.logging import get_logger
from registrar.scanner import Scanner
from registrar.validation import check_tagged_classes, verify_default_loaders

__all__ = ["RegistrarState", "Registration", "Registrar"]

logger = get_logger(__name__)


class RegistrarState(Enum):
    UNINITIALIZED = "uninitialized"
    SCANNING_LOADERS = "scanning_loaders"
    VALIDATING = "validating"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class Registration:
    """The outcome of handing one component type to its loader.

    Attributes:
        type_ref: The component type.
        loader: Qualified name of the loader that handled it.
        instance: Whatever the loader returned; None when it reported failure.
    """

    type_ref: TypeRef
    loader: str
    instance: Any


class Registrar:
    """Registers scanned component types through their declared loaders.

    Example:
        >>> registrar = Registrar(TableScanner(), default_table, "myapp").initialize()
        >>> registrar.on_start_register()
        >>> registrar.register_by_tag("widgets")
    """

    def __init__(
        self,
        scanner: Scanner,
        table: DescriptorTable,
        scope: Optional[str],
        policy: OnStartPolicy = OnStartPolicy.BOTH,
    ):
        self._scanner = scanner
        self._table = table
        self._scope = scope
        self._policy = policy
        self._state = RegistrarState.UNINITIALIZED
        self._loaders: Optional[LoaderRegistry] = None

    @property
    def state(self) -> RegistrarState:
        return self._state

    @property
    def scope(self) -> Optional[str]:
        return self._scope

    @property
    def loaders(self) -> LoaderRegistry:
        self._require_ready()
        return self._loaders

    def initialize(self) -> "Registrar":
        """Build the loader registry and validate the scanned descriptors.

        Returns:
            This registrar, now ready.

        Raises:
            ConfigurationError: If a DefaultLoader component has no zero-argument
                constructor. The registrar is then failed and unusable.
            RegistrarStateError: If the registrar was already initialized.
        """
        if self._state is not RegistrarState.UNINITIALIZED:
            raise RegistrarStateError(
                f"Registrar cannot be initialized from state <{self._state.value}>"
            )

        try:
            self._state = RegistrarState.SCANNING_LOADERS
            self._loaders = build_loader_registry(
                self._scanner, self._table, self._scope
            )

            self._state = RegistrarState.VALIDATING
            verify_default_loaders(self._scanner, self._table, self._scope)
            check_tagged_classes(self._scanner, self._table, self._scope)
        except Exception:
            self._state = RegistrarState.FAILED
            raise

        self._state = RegistrarState.READY
        logger.info("registrar_ready", scope=self._scope, loaders=len(self._loaders))
        return self

    def on_start_register(self) -> list[Registration]:
        """Register every component marked for registration on start.

        Depending on the policy, this covers components marked RegisterOnStart
        directly, components marked with a marker class that is itself marked
        RegisterOnStart, or both. Each component is registered at most once.
        """
        self._require_ready()

        marked = self._find(RegisterOnStart)
        candidates = set()
        if self._policy in (OnStartPolicy.DIRECT, OnStartPolicy.BOTH):
            candidates.update(t for t in marked if not t.is_marker)
        if self._policy in (OnStartPolicy.META, OnStartPolicy.BOTH):
            for marker in (t for t in marked if t.is_marker):
                candidates.update(
                    t for t in self._find(marker.target) if not t.is_marker
                )

        logger.info(
            "on_start_components_found",
            count=len(candidates),
            policy=self._policy.value,
        )
        return self.dispatch(candidates)

    def register_by_tag(self, tag: str) -> list[Registration]:
        """Register every component whose RegisterTag equals ``tag`` exactly.

        A blank tag matches nothing.
        """
        self._require_ready()

        if not tag.strip():
            logger.warning("blank_tag_requested", tag=tag)
            return []

        candidates = {
            t
            for t, register_tag in self._table.described(
                self._find(RegisterTag), RegisterTag
            )
            if register_tag.tag == tag
        }
        logger.info("tagged_components_found", tag=tag, count=len(candidates))
        return self.dispatch(candidates)

    def dispatch(self, candidates: Iterable[TypeRef]) -> list[Registration]:
        """Hand each candidate to the loader named by its LoaderInfo.

        Candidates without LoaderInfo are skipped. A candidate whose loader is
        unavailable, or whose loader raises, is logged and skipped without
        affecting the rest of the batch.

        Returns:
            One Registration per candidate handed to a loader, ordered by name.
        """
        self._require_ready()

        candidates = sorted(set(candidates))
        logger.info("components_loading", count=len(candidates))

        registrations = []
        for type_ref in candidates:
            info = self._table.descriptor(type_ref, LoaderInfo)
            if info is None:
                logger.debug("component_skipped", component=type_ref.name)
                continue

            loader_name = qualified_name(info.loader)
            try:
                loader = self._loaders[loader_name]
            except UnavailableLoaderError as e:
                logger.warning(
                    "loader_unavailable",
                    component=type_ref.name,
                    loader=e.loader_name,
                )
                continue

            logger.info(
                "component_dispatching", component=type_ref.name, loader=loader_name
            )
            try:
                instance = loader.register_class(type_ref)
            except Exception:
                logger.warning(
                    "loader_failed",
                    component=type_ref.name,
                    loader=loader_name,
                    exc_info=True,
                )
                continue
            registrations.append(Registration(type_ref, loader_name, instance))

        return registrations

    def _find(self, marker: type) -> set[TypeRef]:
        return self._scanner.find_types_with_marker(marker, self._scope)

    def _require_ready(self):
        if self._state is not RegistrarState.READY:
            raise RegistrarStateError(
                f"Registrar is not ready (state <{self._state.value}>)"
            )
