"""Base classes and protocols for page components."""

from abc import ABC, abstractmethod
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Component(Protocol):
    """Protocol for page components.

    Any object with a render() method taking props, rendered children and the
    environment flag satisfies this protocol.
    """

    def render(self, props: dict[str, Any], children: list[Any], env: str) -> Any:
        """Render the component."""
        ...


class BaseComponent(ABC):
    """Abstract base class for components shipped with the editor.

    The variant key selects a data-binding/behavior variant of the component
    and is fixed when the loader instantiates it.
    """

    def __init__(self, hook: str = "") -> None:
        self.hook = hook

    @abstractmethod
    def render(self, props: dict[str, Any], children: list[Any], env: str) -> Any:
        """Render the component.

        Args:
            props: Opaque props from the layout node
            children: Already rendered children
            env: Environment flag ("edit" inside the editor)

        Returns:
            A renderable element description
        """
        pass

    def __repr__(self) -> str:
        hook_str = f"({self.hook!r})" if self.hook else "()"
        return f"{self.__class__.__name__}{hook_str}"
