import logging
from typing import Iterable, Optional

from script.steps import DeployContext, StepRegistry

logger = logging.getLogger(__name__)


def order_steps(registry: StepRegistry, names: Iterable[str]) -> list:
    """Order ``names`` so every step runs after its dependencies.

    Dependencies outside ``names`` must still be registered; they are assumed to
    have run already. Ties keep registration order.
    """
    wanted = set(names)
    selected = [name for name in registry.names() if name in wanted]
    for name in selected:
        for dependency in registry.get(name).dependencies:
            if dependency not in registry:
                raise ValueError(f"Step {name} depends on unknown step {dependency}")

    ordered = []
    visiting = set()

    def visit(name):
        if name in ordered:
            return
        if name in visiting:
            raise ValueError(f"Dependency cycle through step {name}")
        visiting.add(name)
        for dependency in sorted(registry.get(name).dependencies, key=registry.names().index):
            if dependency in selected:
                visit(dependency)
        visiting.discard(name)
        ordered.append(name)

    for name in selected:
        visit(name)
    return ordered


def run_pipeline(
    registry: StepRegistry,
    context: DeployContext,
    tags: Optional[Iterable[str]] = None,
    exclude: Optional[Iterable[str]] = None,
) -> list:
    """Run the registered steps matching the tag filter, returning their names in run order."""
    names = [step.name for step in registry if step.matches(tags, exclude)]
    ordered = order_steps(registry, names)
    for name in ordered:
        logger.debug("Running step %s on chain %s", name, context.chain_id)
        registry.get(name)(context)
    return ordered
