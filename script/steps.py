"""
Deployment step descriptors and the registry the pipeline runner reads them from.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Iterator, Optional


@dataclass(frozen=True)
class DeploymentRecord:
    """A contract deployed (or found already deployed) on one network."""

    name: str
    address: str
    chain_id: int
    args: tuple = ()
    newly_deployed: bool = True
    contract: Any = field(default=None, compare=False, repr=False)


@dataclass
class DeployContext:
    """Everything a step needs at call time, passed in explicitly.

    :param chain_id: Chain id of the network being deployed to
    :param deployer: Address used as the transaction sender
    :param deploy: ``deploy(name, options) -> DeploymentRecord``, idempotent per network
    :param log: ``log(message)`` progress reporter
    """

    chain_id: int
    deployer: str
    deploy: Callable[[str, dict], DeploymentRecord]
    log: Callable[[str], None]


def tag_set(tags: Optional[Iterable[str]]) -> frozenset:
    """A single tag may be given as a bare string."""
    if tags is None:
        return frozenset()
    if isinstance(tags, str):
        return frozenset({tags})
    return frozenset(tags)


@dataclass(frozen=True)
class DeployStep:
    name: str
    func: Callable[[DeployContext], None]
    tags: frozenset = frozenset()
    dependencies: frozenset = frozenset()

    def __call__(self, context: DeployContext) -> None:
        return self.func(context)

    def matches(self, include: Optional[Iterable[str]] = None, exclude: Optional[Iterable[str]] = None) -> bool:
        """True when the step carries one of ``include`` (any tag if None) and none of ``exclude``."""
        if exclude and self.tags & tag_set(exclude):
            return False
        if include is None:
            return True
        return bool(self.tags & tag_set(include))


class StepRegistry:
    def __init__(self):
        self._steps = {}

    def add(self, step: DeployStep) -> DeployStep:
        if step.name in self._steps:
            raise ValueError(f"Step {step.name} is already registered")
        self._steps[step.name] = step
        return step

    def step(self, name: str, tags: Iterable[str] = (), dependencies: Iterable[str] = ()):
        """Decorator form of :meth:`add`."""

        def decorator(func):
            return self.add(DeployStep(name, func, tag_set(tags), tag_set(dependencies)))

        return decorator

    def get(self, name: str) -> DeployStep:
        if name not in self._steps:
            raise KeyError(f"Step {name} not found in registry")
        return self._steps[name]

    def names(self) -> list:
        return list(self._steps)

    def __contains__(self, name: str) -> bool:
        return name in self._steps

    def __iter__(self) -> Iterator[DeployStep]:
        return iter(list(self._steps.values()))

    def __len__(self) -> int:
        return len(self._steps)
