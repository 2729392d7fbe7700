import pytest
from ecology.diet import Diet

def test_from_flags_covers_all_four_categories():
    assert Diet.from_flags(can_eat_meat=True, can_eat_plants=False) is Diet.CARNIVORE
    assert Diet.from_flags(can_eat_meat=True, can_eat_plants=True) is Diet.OMNIVORE
    assert Diet.from_flags(can_eat_meat=False, can_eat_plants=True) is Diet.HERBIVORE
    assert Diet.from_flags(can_eat_meat=False, can_eat_plants=False) is Diet.PLANT

def test_flags_round_trip_through_from_flags():
    for diet in Diet:
        assert Diet.from_flags(*diet.flags) is diet

def test_exactly_one_predicate_holds():
    for diet in Diet:
        predicates = [diet.is_carnivore, diet.is_omnivore, diet.is_herbivore, diet.is_plant]
        assert predicates.count(True) == 1, diet

def test_predicates_follow_capability_flags():
    assert Diet.CARNIVORE.is_carnivore
    assert Diet.OMNIVORE.is_omnivore
    assert Diet.HERBIVORE.is_herbivore
    assert Diet.PLANT.is_plant

    assert not Diet.PLANT.can_eat_meat and not Diet.PLANT.can_eat_plants
    assert Diet.OMNIVORE.can_eat_meat and Diet.OMNIVORE.can_eat_plants

def test_meat_eaters():
    assert Diet.CARNIVORE.is_meat_eater
    assert Diet.OMNIVORE.is_meat_eater
    assert not Diet.HERBIVORE.is_meat_eater
    assert not Diet.PLANT.is_meat_eater

def test_parse_is_case_insensitive():
    assert Diet.parse("Herbivore") is Diet.HERBIVORE
    assert Diet.parse("  PLANT ") is Diet.PLANT
    assert Diet.parse(Diet.OMNIVORE) is Diet.OMNIVORE

def test_parse_unknown_name():
    with pytest.raises(ValueError, match="Unknown diet"):
        Diet.parse("fungus")
