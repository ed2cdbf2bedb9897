"""
Property tests over randomly generated well-formed definitions.
"""

import random
from typing import Any, Dict

import pytest

from src.catalog import FootgunCatalog, FootgunStatus
from src.exceptions import DuplicateIdError

FRAMEWORKS = ["Express", "SvelteKit", "Firebase", "Next.js", "Remix"]
SEEDS = list(range(25))


def generate_definition(rng: random.Random) -> Dict[str, Any]:
    """Build a well-formed definition with unique, shuffled ids."""
    frameworks = rng.sample(FRAMEWORKS, rng.randint(1, len(FRAMEWORKS)))
    count = rng.randint(0, 30)
    ids = rng.sample(range(1, 1000), count)

    footguns = []
    for footgun_id in ids:
        status = rng.choice(list(FootgunStatus))
        remedy_count = rng.randint(0 if status == FootgunStatus.OPEN else 1, 3)
        footguns.append({
            "id": footgun_id,
            "framework": rng.choice(frameworks),
            "title": f"Footgun {footgun_id}",
            "status": status.value,
            "explanation": f"Explanation for {footgun_id}",
            "reproduction": {"scenario": f"Scenario {footgun_id}"},
            "remedies": [
                {"label": f"Solution {chr(65 + i)}", "guidance": f"Guidance {i}"}
                for i in range(remedy_count)
            ],
        })
    return {"frameworks": frameworks, "footguns": footguns}


@pytest.mark.parametrize("seed", SEEDS)
def test_loaded_ids_are_unique(seed):
    """Every loaded catalog has unique ids."""
    definition = generate_definition(random.Random(seed))
    catalog = FootgunCatalog.from_dict(definition)

    ids = [r.id for r in catalog]
    assert len(ids) == len(set(ids))
    assert len(catalog) == len(definition["footguns"])


@pytest.mark.parametrize("seed", SEEDS)
def test_catalog_order_matches_definition(seed):
    """Catalog order is definition order, per framework too."""
    definition = generate_definition(random.Random(seed))
    catalog = FootgunCatalog.from_dict(definition)

    assert [r.id for r in catalog] == [f["id"] for f in definition["footguns"]]
    for name in definition["frameworks"]:
        expected = [f["id"] for f in definition["footguns"] if f["framework"] == name]
        assert [r.id for r in catalog.by_framework(name)] == expected


@pytest.mark.parametrize("seed", SEEDS)
def test_all_open_partitions_by_status(seed):
    """all_open() holds exactly the open records."""
    catalog = FootgunCatalog.from_dict(generate_definition(random.Random(seed)))

    open_ids = {r.id for r in catalog.all_open()}
    assert open_ids == {r.id for r in catalog if r.status == FootgunStatus.OPEN}


@pytest.mark.parametrize("seed", SEEDS)
def test_injected_duplicate_is_rejected(seed):
    """Copying any record's id onto another fails the whole load."""
    rng = random.Random(seed)
    definition = generate_definition(rng)
    if len(definition["footguns"]) < 2:
        definition = generate_definition(random.Random(seed + 1000))
    if len(definition["footguns"]) < 2:
        pytest.skip("generated definition too small")

    source, target = rng.sample(range(len(definition["footguns"])), 2)
    definition["footguns"][target]["id"] = definition["footguns"][source]["id"]

    with pytest.raises(DuplicateIdError):
        FootgunCatalog.from_dict(definition)


@pytest.mark.parametrize("seed", SEEDS)
def test_round_trip(seed):
    """to_dict() reloads to an equal catalog."""
    catalog = FootgunCatalog.from_dict(generate_definition(random.Random(seed)))

    assert FootgunCatalog.from_dict(catalog.to_dict()) == catalog
