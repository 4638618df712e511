from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol, Sequence

from lirs.interpreter import Session
from lirs.types.errors import LirsTypeError

logger = logging.getLogger(__name__)

# -----------------------------
# Protocols
# -----------------------------

class PropertyPredictor(Protocol):
    def predict(self, property_name: str, formula: str) -> Any:
        ...


class SimilaritySearch(Protocol):
    def find_similar(self, formula: str, k: int) -> Sequence[str]:
        ...


class MaterialDiscovery(Protocol):
    def discover(self, target_property: str, target_value: float, max_candidates: int) -> Sequence[str]:
        ...


class OrchestrationError(Exception):
    """Raised when a required collaborator is not configured."""


# -----------------------------
# Orchestration results
# -----------------------------

@dataclass
class Prediction:
    formula: str
    property_name: str
    value: Any


# -----------------------------
# Orchestrator
# -----------------------------

class MaterialsOrchestrator:
    """
    Host-side bridge between a LIRS Session and AI collaborators.

    Responsibilities:
    - Evaluate LIRS code to a formula string
    - Hand that formula to a predictor or similarity search, sync or async
    - Ask a discovery engine for candidate formulas near a property target

    The evaluator never calls a collaborator; only this layer does.
    """

    def __init__(
        self,
        session: Optional[Session] = None,
        *,
        predictor: Optional[PropertyPredictor] = None,
        search: Optional[SimilaritySearch] = None,
        discovery: Optional[MaterialDiscovery] = None,
    ):
        self.session = session if session is not None else Session()
        self._predictor = predictor
        self._search = search
        self._discovery = discovery

    # -------------------------
    # Public API
    # -------------------------

    def formula(self, code: str) -> str:
        value = self.session.eval(code)
        if not isinstance(value, str):
            raise LirsTypeError(f"Expected a formula string, got {value!r}")
        return value

    async def predict(self, property_name: str, code: str) -> Prediction:
        if self._predictor is None:
            raise OrchestrationError("No property predictor configured")
        formula = self.formula(code)
        logger.debug("Predicting %s for %s", property_name, formula)
        value = await _resolve(self._predictor.predict(property_name, formula))
        return Prediction(formula=formula, property_name=property_name, value=value)

    async def find_similar(self, code: str, k: int = 10) -> list[str]:
        if self._search is None:
            raise OrchestrationError("No similarity search configured")
        if k < 1:
            raise ValueError("k must be positive")
        formula = self.formula(code)
        logger.debug("Searching %d neighbours of %s", k, formula)
        found = await _resolve(self._search.find_similar(formula, k))
        return list(found)[:k]

    async def discover(self, target_property: str, target_value: float, max_candidates: int = 10) -> list[str]:
        """Candidate formulas whose `target_property` should land near `target_value`."""
        if self._discovery is None:
            raise OrchestrationError("No discovery engine configured")
        if max_candidates < 1:
            raise ValueError("max_candidates must be positive")
        logger.debug("Discovering up to %d candidates for %s=%s", max_candidates, target_property, target_value)
        found = await _resolve(self._discovery.discover(target_property, target_value, max_candidates))
        return list(found)[:max_candidates]


async def _resolve(result: Any) -> Any:
    if inspect.isawaitable(result):
        return await result
    return result
