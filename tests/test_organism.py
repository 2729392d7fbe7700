import pytest
from pydantic import ValidationError

from ecology.config import VITALITY_MAX
from ecology.diet import Diet
from ecology.organism import Organism

def test_is_dead_iff_vitality_zero():
    for diet in Diet:
        for vitality in (0, 1, 2, 57, VITALITY_MAX):
            org = Organism.new("x", vitality, diet)
            assert org.is_dead() == (org.vitality == 0)

def test_per_diet_constructors():
    assert Organism.carnivore("wolf", 10).diet is Diet.CARNIVORE
    assert Organism.omnivore("bear", 10).diet is Diet.OMNIVORE
    assert Organism.herbivore("deer", 10).diet is Diet.HERBIVORE
    assert Organism.plant("fern", 10).diet is Diet.PLANT

def test_new_accepts_diet_name():
    org = Organism.new("deer", 7, "Herbivore")
    assert org.is_herbivore()
    assert org.species == "deer"
    assert org.vitality == 7

def test_species_is_opaque():
    species = ("genus", 42)
    org = Organism.carnivore(species, 3)
    assert org.species == species
    assert org.same_kind(Organism.carnivore(("genus", 42), 9))

def test_vitality_bounds():
    with pytest.raises(ValidationError):
        Organism.herbivore("deer", -1)
    with pytest.raises(ValidationError):
        Organism.herbivore("deer", VITALITY_MAX + 1)
    assert Organism.herbivore("deer", VITALITY_MAX).vitality == VITALITY_MAX

def test_organism_is_frozen():
    org = Organism.carnivore("wolf", 10)
    with pytest.raises(ValidationError):
        org.vitality = 0
    assert org.vitality == 10

def test_with_vitality_returns_new_value():
    org = Organism.omnivore("bear", 10)
    fed = org.with_vitality(15)

    assert fed.vitality == 15
    assert fed.species == "bear"
    assert fed.diet is Diet.OMNIVORE
    assert org.vitality == 10

def test_same_kind_needs_species_and_diet():
    wolf = Organism.carnivore("wolf", 10)
    assert wolf.same_kind(Organism.carnivore("wolf", 1))
    assert not wolf.same_kind(Organism.carnivore("lynx", 10))
    assert not wolf.same_kind(Organism.omnivore("wolf", 10))

def test_predicate_accessors():
    fern = Organism.plant("fern", 3)
    assert fern.is_plant()
    assert not fern.is_herbivore() and not fern.is_carnivore() and not fern.is_omnivore()
    assert not fern.is_meat_eater()

def test_handle():
    assert Organism.herbivore("deer", 3).handle == "herbivore:deer"

def test_equality_is_by_value():
    assert Organism.carnivore("wolf", 10) == Organism.carnivore("wolf", 10)
    assert Organism.carnivore("wolf", 10) != Organism.carnivore("wolf", 11)
