"""DI provider base."""

from typing import ClassVar, Literal

from dishka import Provider

# Infrastructure parts with a mock implementation for tests
Component = Literal["oauth", "persistence", "session"]


class ProviderBase(Provider):
    """Provider tagged with the component it implements.

    Mockable components declare a base class carrying __mock_component__;
    its production and mock subclasses differ only in __is_mock__.
    Providers without subclasses are used as-is.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
