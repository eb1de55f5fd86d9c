"""Feature generators, in the order the driver runs them.

The order is part of the contract: a generator sees the settings contributed
by every generator before it in ``default_generators()`` and none after it, and
operations are executed in the same order.
"""

from .amqp import AmqpGenerator
from .base import Generator
from .ci import CIGenerator
from .docker import DockerGenerator
from .ecto import EctoGenerator, get_adapter
from .mix import MixGenerator
from .umbrella import UmbrellaGenerator


def default_generators() -> list[Generator]:
    """Return fresh instances of the built-in generators in registration order."""
    return [
        MixGenerator(),
        UmbrellaGenerator(),
        EctoGenerator(),
        AmqpGenerator(),
        CIGenerator(),
        DockerGenerator(),
    ]


__all__ = [
    "AmqpGenerator",
    "CIGenerator",
    "DockerGenerator",
    "EctoGenerator",
    "Generator",
    "MixGenerator",
    "UmbrellaGenerator",
    "default_generators",
    "get_adapter",
]
