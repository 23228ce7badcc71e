"""Exception types raised by the page builder."""


class PageBuilderError(Exception):
    """Base class for page builder errors."""


class LayoutError(PageBuilderError, ValueError):
    """A layout document or node is malformed."""


class ComponentResolutionError(PageBuilderError, LookupError):
    """A component could not be resolved to an implementation."""

    def __init__(self, name: str, hook: str, reason: str) -> None:
        super().__init__(f"Cannot resolve component '{name}' (hook '{hook}'): {reason}")
        self.name = name
        self.hook = hook


class PageResponseError(PageBuilderError):
    """The page server answered with a non-zero error code."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(f"Page server error {code}: {message}")
        self.code = code
