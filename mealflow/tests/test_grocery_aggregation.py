import unittest
from types import SimpleNamespace

from mealflow.services.grocery import aggregate_ingredients


def _line(name, quantity, category="Other", unit="units"):
    ingredient = SimpleNamespace(name=name, category=category, unit=unit)
    return SimpleNamespace(ingredient=ingredient, quantity=quantity)


def _entry(*lines):
    return SimpleNamespace(recipe=SimpleNamespace(recipe_ingredients=list(lines)))


class TestAggregateIngredients(unittest.TestCase):

    def test_quantities_are_summed_by_name(self):
        entries = [
            _entry(_line("A", 2), _line("B", 1)),
            _entry(_line("A", 3)),
        ]
        grouped, total = aggregate_ingredients(entries)

        quantities = {item.name: item.quantity for item in grouped["Other"]}
        self.assertEqual(quantities, {"A": 5, "B": 1})
        self.assertEqual(total, 2)

    def test_grouped_by_ingredient_category(self):
        entries = [_entry(_line("Eggs", 2, "Dairy", "pieces"), _line("Flour", 1, "Grains", "cups"))]
        grouped, total = aggregate_ingredients(entries)

        self.assertEqual(list(grouped), ["Dairy", "Grains"])
        self.assertEqual(grouped["Dairy"][0].name, "Eggs")
        self.assertEqual(grouped["Dairy"][0].quantity, 2)
        self.assertEqual(grouped["Grains"][0].unit, "cups")
        self.assertEqual(total, 2)

    def test_no_entries(self):
        self.assertEqual(aggregate_ingredients([]), ({}, 0))

    def test_recipe_without_ingredients(self):
        self.assertEqual(aggregate_ingredients([_entry()]), ({}, 0))

    def test_first_seen_order(self):
        entries = [
            _entry(_line("Salt", 1, "Spices"), _line("Milk", 1, "Dairy")),
            _entry(_line("Butter", 1, "Dairy"), _line("Pepper", 1, "Spices")),
        ]
        grouped, _ = aggregate_ingredients(entries)

        self.assertEqual(list(grouped), ["Spices", "Dairy"])
        self.assertEqual([i.name for i in grouped["Spices"]], ["Salt", "Pepper"])
        self.assertEqual([i.name for i in grouped["Dairy"]], ["Milk", "Butter"])

    def test_same_recipe_planned_twice(self):
        recipe_entry = _entry(_line("Rice", 1.5, "Grains", "cups"))
        grouped, _ = aggregate_ingredients([recipe_entry, recipe_entry])
        self.assertEqual(grouped["Grains"][0].quantity, 3.0)

    def test_units_are_not_converted(self):
        # the ingredient's own unit is reported, numbers are added as they are
        entries = [_entry(_line("Milk", 250, "Dairy", "ml")), _entry(_line("Milk", 1, "Dairy", "ml"))]
        grouped, _ = aggregate_ingredients(entries)
        self.assertEqual(grouped["Dairy"][0].quantity, 251)
        self.assertEqual(grouped["Dairy"][0].unit, "ml")

    def test_names_are_case_sensitive(self):
        grouped, total = aggregate_ingredients([_entry(_line("egg", 1), _line("Egg", 1))])
        self.assertEqual(total, 2)


if __name__ == "__main__":
    unittest.main()
