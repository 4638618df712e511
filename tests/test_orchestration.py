import asyncio

import pytest

from lirs.orchestration import MaterialsOrchestrator, OrchestrationError, Prediction
from lirs.types.errors import LirsTypeError, LirsUnboundSymbol


class FakePredictor:
    def __init__(self):
        self.calls = []

    def predict(self, property_name, formula):
        self.calls.append((property_name, formula))
        return len(formula) * 0.5


class AsyncPredictor:
    async def predict(self, property_name, formula):
        await asyncio.sleep(0)
        return {"property": property_name, "formula": formula}


class FakeSearch:
    def find_similar(self, formula, k):
        return [formula + str(i) for i in range(k + 5)]


class AsyncSearch:
    async def find_similar(self, formula, k):
        return (f"{formula}-{i}" for i in range(k))


class FakeDiscovery:
    def __init__(self):
        self.calls = []

    def discover(self, target_property, target_value, max_candidates):
        self.calls.append((target_property, target_value, max_candidates))
        return ["LiFePO4", "LiCoO2", "LiMn2O4", "NaFePO4"]


class AsyncDiscovery:
    async def discover(self, target_property, target_value, max_candidates):
        await asyncio.sleep(0)
        return (f"{target_property}-{i}" for i in range(max_candidates))


def test_formula_evaluates_code():
    orchestrator = MaterialsOrchestrator()
    assert orchestrator.formula("(perovskite :Ca :Ti :O)") == "CaTiO3"


def test_formula_requires_string_value():
    orchestrator = MaterialsOrchestrator()
    with pytest.raises(LirsTypeError):
        orchestrator.formula("(+ 1 2)")


def test_predict_with_sync_collaborator():
    predictor = FakePredictor()
    orchestrator = MaterialsOrchestrator(predictor=predictor)
    result = asyncio.run(orchestrator.predict("band_gap", "(rutile :Ti)"))
    assert result == Prediction(formula="TiO2", property_name="band_gap", value=2.0)
    assert predictor.calls == [("band_gap", "TiO2")]


def test_predict_with_async_collaborator():
    orchestrator = MaterialsOrchestrator(predictor=AsyncPredictor())
    result = asyncio.run(orchestrator.predict("density", "(spinel :Mg :Al)"))
    assert result.value == {"property": "density", "formula": "MgAl2O4"}


def test_find_similar_truncates_to_k():
    orchestrator = MaterialsOrchestrator(search=FakeSearch())
    found = asyncio.run(orchestrator.find_similar("(rock-salt :Na :Cl)", k=3))
    assert found == ["NaCl0", "NaCl1", "NaCl2"]


def test_find_similar_async():
    orchestrator = MaterialsOrchestrator(search=AsyncSearch())
    found = asyncio.run(orchestrator.find_similar("(fcc :Cu)", k=2))
    assert found == ["Cu-0", "Cu-1"]


def test_find_similar_rejects_bad_k():
    orchestrator = MaterialsOrchestrator(search=FakeSearch())
    with pytest.raises(ValueError):
        asyncio.run(orchestrator.find_similar("(fcc :Cu)", k=0))


def test_missing_collaborators():
    orchestrator = MaterialsOrchestrator()
    with pytest.raises(OrchestrationError):
        asyncio.run(orchestrator.predict("band_gap", "(fcc :Cu)"))
    with pytest.raises(OrchestrationError):
        asyncio.run(orchestrator.find_similar("(fcc :Cu)"))
    with pytest.raises(OrchestrationError):
        asyncio.run(orchestrator.discover("band_gap", 1.5))


def test_orchestrator_shares_session_state(session):
    session.eval("(define base (garnet :Y :Al :Fe))")
    orchestrator = MaterialsOrchestrator(session, predictor=FakePredictor())
    assert orchestrator.formula("(substitute base :Y :Gd)") == "Gd3Al2Fe3O12"
    with pytest.raises(LirsUnboundSymbol):
        asyncio.run(orchestrator.predict("band_gap", "missing"))


def test_discover_with_sync_collaborator():
    discovery = FakeDiscovery()
    orchestrator = MaterialsOrchestrator(discovery=discovery)
    found = asyncio.run(orchestrator.discover("band_gap", 1.5, max_candidates=2))
    assert found == ["LiFePO4", "LiCoO2"]
    assert discovery.calls == [("band_gap", 1.5, 2)]


def test_discover_with_async_collaborator():
    orchestrator = MaterialsOrchestrator(discovery=AsyncDiscovery())
    found = asyncio.run(orchestrator.discover("density", 3.0))
    assert found == [f"density-{i}" for i in range(10)]


def test_discover_rejects_bad_max_candidates():
    orchestrator = MaterialsOrchestrator(discovery=FakeDiscovery())
    with pytest.raises(ValueError):
        asyncio.run(orchestrator.discover("band_gap", 1.5, max_candidates=0))
