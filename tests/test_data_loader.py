import tempfile
from pathlib import Path

import pytest
from pydantic import ValidationError

from ecology.data_loader import OrganismDef, clear_cache, get_roster_def, load_roster
from ecology.diet import Diet
from ecology.encounter import encounter_series
from ecology.organism import Organism

PACK = """
[[organisms]]
species = "wolf"
diet = "Carnivore"
vitality = 10

[[organisms]]
species = "coyote"
diet = "carnivore"
vitality = 4

[[organisms]]
species = "lynx"
diet = "CARNIVORE"
vitality = 6
"""

def _write(tmpdir, name, text):
    path = Path(tmpdir) / name
    path.write_text(text, encoding="utf-8")
    return path

def setup_function():
    clear_cache()

def test_load_roster_in_file_order():
    with tempfile.TemporaryDirectory() as tmpdir:
        roster = load_roster(_write(tmpdir, "pack.toml", PACK))

    assert [o.species for o in roster] == ["wolf", "coyote", "lynx"]
    assert all(o.diet is Diet.CARNIVORE for o in roster)
    assert roster[0] == Organism.carnivore("wolf", 10)

def test_roster_feeds_series():
    with tempfile.TemporaryDirectory() as tmpdir:
        first, *rest = load_roster(_write(tmpdir, "pack.toml", PACK))

    # 10 -> 12 (coyote) -> 15 (lynx)
    assert encounter_series(first, rest).vitality == 15

def test_roster_is_cached_per_path():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = _write(tmpdir, "pack.toml", PACK)
        first = get_roster_def(path)
        assert get_roster_def(str(path)) is first

        clear_cache()
        assert get_roster_def(path) is not first

def test_empty_roster():
    with tempfile.TemporaryDirectory() as tmpdir:
        assert load_roster(_write(tmpdir, "empty.toml", "")) == []

def test_missing_roster():
    with pytest.raises(FileNotFoundError):
        load_roster("/nonexistent/roster.toml")

def test_unknown_diet_is_a_validation_error():
    with pytest.raises(ValidationError):
        OrganismDef(species="mushroom", diet="fungus", vitality=3)

def test_negative_vitality_is_a_validation_error():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = _write(tmpdir, "bad.toml", '[[organisms]]\nspecies = "fern"\ndiet = "plant"\nvitality = -2\n')
        with pytest.raises(ValidationError):
            load_roster(path)
