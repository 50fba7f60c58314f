"""
User-Agent header composition.

The default header identifies the SDK and the running interpreter, e.g.
"klevu-python-sdk/1.0.0 (Python 3.12.1)". Integrations can append their own
product tokens by registering further providers.
"""

import platform
from abc import ABC, abstractmethod

from klevu import __version__

PRODUCT_NAME = "klevu-python-sdk"


class UserAgentProvider(ABC):
    """Returns one product token (or comment) for the User-Agent header."""

    @abstractmethod
    def execute(self) -> str:
        pass


class StaticUserAgentProvider(UserAgentProvider):
    """Fixed token, e.g. an integration name and version."""

    def __init__(self, user_agent: str):
        self.user_agent = user_agent

    def execute(self) -> str:
        return self.user_agent


class PythonVersionProvider(UserAgentProvider):
    def execute(self) -> str:
        return f"Python {platform.python_version()}"


class ComposableUserAgentProvider(UserAgentProvider):
    """
    Joins the output of child providers, in registration order, with spaces.

    Providers registered with an identifier replace any earlier provider
    registered under the same identifier.
    """

    def __init__(self, user_agent_providers: dict[str, UserAgentProvider] | list[UserAgentProvider] | None = None):
        self.user_agent_providers: dict[str, UserAgentProvider] = {}
        self.add_user_agent_providers(user_agent_providers)

    def add_user_agent_providers(
        self,
        user_agent_providers: dict[str, UserAgentProvider] | list[UserAgentProvider] | None,
    ) -> None:
        if isinstance(user_agent_providers, dict):
            for identifier, provider in user_agent_providers.items():
                self.add_user_agent_provider(provider, identifier)
        else:
            for provider in user_agent_providers or []:
                self.add_user_agent_provider(provider)

    def add_user_agent_provider(self, provider: UserAgentProvider, identifier: str | None = None) -> None:
        if not identifier:
            identifier = f"_{len(self.user_agent_providers)}"
        self.user_agent_providers[identifier] = provider

    def get_user_agent_provider_by_identifier(self, identifier: str) -> UserAgentProvider | None:
        return self.user_agent_providers.get(identifier)

    def child_strings(self) -> list[str]:
        return [
            user_agent
            for user_agent in (provider.execute() for provider in self.user_agent_providers.values())
            if user_agent
        ]

    def execute(self) -> str:
        return " ".join(self.child_strings())


class SdkUserAgentProvider(ComposableUserAgentProvider):
    """SDK product token with system information as a comment."""

    def __init__(self, system_information_providers: dict[str, UserAgentProvider] | None = None):
        super().__init__({"python": PythonVersionProvider()})
        self.add_user_agent_providers(system_information_providers)

    def execute(self) -> str:
        user_agent = f"{PRODUCT_NAME}/{__version__}" if __version__ else PRODUCT_NAME
        system_information = self.child_strings()
        if system_information:
            user_agent += f" ({'; '.join(system_information)})"
        return user_agent


class DefaultUserAgentProvider(ComposableUserAgentProvider):
    """
    User-Agent sent with every request.

    Args:
        user_agent_providers: Extra providers whose output is appended,
            separated by a space
    """

    def __init__(self, user_agent_providers: dict[str, UserAgentProvider] | list[UserAgentProvider] | None = None):
        super().__init__({PRODUCT_NAME: SdkUserAgentProvider()})
        self.add_user_agent_providers(user_agent_providers)
