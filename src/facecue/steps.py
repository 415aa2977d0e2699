"""Stage declarations and per-stage timing for the analyzer.

The per-frame pipeline is a straight chain. Each stage names the stage it
follows, and ``get_processing_steps`` walks that chain from its head:

    luminance -> scan -> select -> estimate
"""

import time
from dataclasses import dataclass
from functools import wraps
from typing import Dict, List, Optional


@dataclass(frozen=True)
class ProcessingStep:
    """One stage of the per-frame pipeline.

    Attributes:
        name: Stage identifier, also the key in the timing dict.
        description: What the stage computes.
        follows: Name of the preceding stage, None for the head.
        method_name: Analyzer method implementing the stage.
    """

    name: str
    description: str = ""
    follows: Optional[str] = None
    method_name: str = ""

    def __str__(self) -> str:
        if self.follows is None:
            return f"{self.name}: {self.description}"
        return f"{self.follows} -> {self.name}: {self.description}"


def processing_step(name: str, description: str = "", follows: Optional[str] = None):
    """Mark an analyzer method as a pipeline stage.

    While the analyzer's ``_step_timings`` is a dict, every call stores its
    wall time there in milliseconds under ``name``, also when the stage
    raises.
    """

    def decorator(method):
        info = ProcessingStep(
            name=name,
            description=description or (method.__doc__ or "").strip(),
            follows=follows,
            method_name=method.__name__,
        )

        @wraps(method)
        def timed(self, *args, **kwargs):
            timings = getattr(self, "_step_timings", None)
            if timings is None:
                return method(self, *args, **kwargs)
            t0 = time.perf_counter_ns()
            try:
                return method(self, *args, **kwargs)
            finally:
                timings[name] = (time.perf_counter_ns() - t0) / 1e6

        timed.step = info
        return timed

    return decorator


def get_processing_steps(obj) -> List[ProcessingStep]:
    """Stages declared on a class or instance, in execution order.

    Raises:
        ValueError: If the stages do not form a single chain.
    """
    cls = obj if isinstance(obj, type) else type(obj)
    declared = [
        member.step
        for member in vars(cls).values()
        if isinstance(getattr(member, "step", None), ProcessingStep)
    ]
    if not declared:
        return []

    heads = [s for s in declared if s.follows is None]
    successors: Dict[str, ProcessingStep] = {}
    for s in declared:
        if s.follows is None:
            continue
        if s.follows in successors:
            raise ValueError(f"Stages branch after '{s.follows}'")
        successors[s.follows] = s
    if len(heads) != 1:
        raise ValueError(f"Expected one head stage, found {len(heads)}")

    chain = [heads[0]]
    while chain[-1].name in successors:
        chain.append(successors[chain[-1].name])
    if len(chain) != len(declared):
        raise ValueError("Stages are not connected into one chain")
    return chain


__all__ = ["ProcessingStep", "processing_step", "get_processing_steps"]
