import unittest

from mealflow.tests.base import ApiTestCase

PANCAKES = {
    "title": "Pancakes",
    "description": "Fluffy breakfast classic",
    "instructions": ["Mix", "Fry"],
    "tags": ["breakfast", "quick"],
    "rating": 4.5,
    "prepTime": 10,
    "cookTime": 15,
    "servings": 4,
    "ingredients": [
        {"name": "Flour", "quantity": 2, "category": "Grains", "unit": "cups"},
        {"name": "Eggs", "quantity": 2, "category": "Dairy", "unit": "pieces"},
    ],
}


class TestRecipesAPI(ApiTestCase):

    async def asyncSetUp(self):
        await super().asyncSetUp()
        self.admin = await self.create_admin()
        self.user = await self.create_user("eater@example.com")

    async def _create(self, payload=None, user=None):
        return await self.client.post(
            "/api/recipes",
            json=payload or PANCAKES,
            headers=self.auth(user or self.admin),
        )

    async def test_admin_creates_recipe(self):
        resp = await self._create()
        self.assertEqual(resp.status_code, 201)
        data = resp.json()
        self.assertEqual(data["message"], "Recipe created successfully")

        recipe = data["recipe"]
        self.assertEqual(recipe["title"], "Pancakes")
        self.assertEqual(recipe["instructions"], ["Mix", "Fry"])
        self.assertEqual(recipe["tags"], ["breakfast", "quick"])
        self.assertEqual(recipe["prepTime"], 10)
        self.assertEqual(recipe["user"], {"id": self.admin.id, "name": "Admin User"})
        self.assertEqual(recipe["favoritesCount"], 0)
        names = [line["ingredient"]["name"] for line in recipe["recipeIngredients"]]
        self.assertEqual(names, ["Flour", "Eggs"])
        self.assertEqual(recipe["recipeIngredients"][1]["ingredient"]["unit"], "pieces")

    async def test_unknown_ingredient_gets_defaults(self):
        payload = dict(PANCAKES, ingredients=[{"name": "Saffron", "quantity": 0.1}])
        recipe = (await self._create(payload)).json()["recipe"]

        ingredient = recipe["recipeIngredients"][0]["ingredient"]
        self.assertEqual((ingredient["category"], ingredient["unit"]), ("Other", "units"))

    async def test_regular_user_cannot_create(self):
        resp = await self._create(user=self.user)
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json()["detail"], "Access denied. Only admins can create recipes.")

    async def test_missing_fields_are_rejected(self):
        resp = await self._create({"description": "no title"})
        self.assertEqual(resp.status_code, 400)
        fields = {error["field"] for error in resp.json()["detail"]}
        self.assertTrue({"title", "instructions", "ingredients"} <= fields)

    async def test_get_recipe(self):
        recipe_id = (await self._create()).json()["recipe"]["id"]

        resp = await self.client.get(f"/api/recipes/{recipe_id}", headers=self.auth(self.user))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["recipe"]["id"], recipe_id)

        resp = await self.client.get("/api/recipes/9999", headers=self.auth(self.user))
        self.assertEqual(resp.status_code, 404)

    async def test_list_requires_token(self):
        resp = await self.client.get("/api/recipes")
        self.assertEqual(resp.status_code, 401)


class TestRecipeSearch(ApiTestCase):

    async def asyncSetUp(self):
        await super().asyncSetUp()
        self.admin = await self.create_admin()
        await self.create_recipe(
            self.admin,
            title="Tomato Soup",
            description="Warm and simple",
            tags=["soup", "dinner"],
            rating=3.0,
            prep_time=15,
            ingredients=[{"name": "Tomato", "quantity": 4, "category": "Vegetables", "unit": "pieces"}],
        )
        await self.create_recipe(
            self.admin,
            title="Pancakes",
            description="Fluffy breakfast",
            tags=["breakfast"],
            rating=4.5,
            prep_time=10,
            ingredients=[{"name": "Eggs", "quantity": 2, "category": "Dairy", "unit": "pieces"}],
        )
        await self.create_recipe(
            self.admin,
            title="Avocado Toast",
            tags=["breakfast", "quick"],
            rating=4.0,
            prep_time=5,
            ingredients=[{"name": "Bread", "quantity": 2, "category": "Grains", "unit": "slices"}],
        )

    async def _titles(self, **params):
        resp = await self.client.get("/api/recipes", params=params, headers=self.auth(self.admin))
        self.assertEqual(resp.status_code, 200)
        return [r["title"] for r in resp.json()["recipes"]]

    async def test_default_order_is_newest_first(self):
        self.assertEqual(await self._titles(), ["Avocado Toast", "Pancakes", "Tomato Soup"])

    async def test_search_title_or_description(self):
        self.assertEqual(await self._titles(search="soup"), ["Tomato Soup"])
        self.assertEqual(await self._titles(search="FLUFFY"), ["Pancakes"])
        self.assertEqual(await self._titles(search="nothing like this"), [])

    async def test_filter_by_any_tag(self):
        self.assertEqual(await self._titles(tags="breakfast", sortBy="title", order="asc"),
                         ["Avocado Toast", "Pancakes"])
        self.assertEqual(await self._titles(tags="quick,soup", sortBy="title", order="asc"),
                         ["Avocado Toast", "Tomato Soup"])

    async def test_filter_by_ingredient_name(self):
        self.assertEqual(await self._titles(ingredients="eggs"), ["Pancakes"])
        self.assertEqual(await self._titles(ingredients="Eggs, tomato", sortBy="title", order="asc"),
                         ["Pancakes", "Tomato Soup"])

    async def test_sorting(self):
        self.assertEqual(await self._titles(sortBy="rating", order="desc"),
                         ["Pancakes", "Avocado Toast", "Tomato Soup"])
        self.assertEqual(await self._titles(sortBy="prepTime", order="asc"),
                         ["Avocado Toast", "Pancakes", "Tomato Soup"])

    async def test_invalid_sort_field(self):
        resp = await self.client.get("/api/recipes", params={"sortBy": "calories"}, headers=self.auth(self.admin))
        self.assertEqual(resp.status_code, 400)

    async def test_pagination(self):
        resp = await self.client.get(
            "/api/recipes",
            params={"sortBy": "title", "order": "asc", "page": 2, "limit": 2},
            headers=self.auth(self.admin),
        )
        data = resp.json()
        self.assertEqual([r["title"] for r in data["recipes"]], ["Tomato Soup"])
        self.assertEqual(data["pagination"], {"total": 3, "page": 2, "limit": 2, "totalPages": 2})


class TestRecipeOwnership(ApiTestCase):

    async def asyncSetUp(self):
        await super().asyncSetUp()
        self.admin = await self.create_admin()
        self.other_admin = await self.create_admin("second-admin@example.com")
        self.user = await self.create_user("eater@example.com")
        self.recipe = await self.create_recipe(
            self.admin,
            title="Chili",
            tags=["spicy"],
            ingredients=[
                {"name": "Beans", "quantity": 2, "category": "Legumes", "unit": "cans"},
                {"name": "Onion", "quantity": 1, "category": "Vegetables", "unit": "pieces"},
            ],
        )

    async def test_owner_updates_fields(self):
        resp = await self.client.put(
            f"/api/recipes/{self.recipe.id}",
            json={"title": "Chili con Carne", "servings": 6, "tags": ["spicy", "dinner"]},
            headers=self.auth(self.admin),
        )
        self.assertEqual(resp.status_code, 200)
        recipe = resp.json()["recipe"]
        self.assertEqual(recipe["title"], "Chili con Carne")
        self.assertEqual(recipe["servings"], 6)
        self.assertEqual(recipe["tags"], ["dinner", "spicy"])
        # ingredients were not sent and stay as they were
        self.assertEqual(len(recipe["recipeIngredients"]), 2)

    async def test_ingredients_replaced_wholesale(self):
        resp = await self.client.put(
            f"/api/recipes/{self.recipe.id}",
            json={"ingredients": [{"name": "Beef", "quantity": 500, "category": "Meat", "unit": "grams"}]},
            headers=self.auth(self.admin),
        )
        lines = resp.json()["recipe"]["recipeIngredients"]
        self.assertEqual([(l["ingredient"]["name"], l["quantity"]) for l in lines], [("Beef", 500)])

    async def test_non_owner_cannot_update_or_delete(self):
        for user in (self.user, self.other_admin):
            resp = await self.client.put(
                f"/api/recipes/{self.recipe.id}",
                json={"title": "Hijacked"},
                headers=self.auth(user),
            )
            self.assertEqual(resp.status_code, 403)

            resp = await self.client.delete(f"/api/recipes/{self.recipe.id}", headers=self.auth(user))
            self.assertEqual(resp.status_code, 403)

    async def test_owner_deletes_recipe(self):
        resp = await self.client.delete(f"/api/recipes/{self.recipe.id}", headers=self.auth(self.admin))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["message"], "Recipe deleted successfully")

        resp = await self.client.get(f"/api/recipes/{self.recipe.id}", headers=self.auth(self.admin))
        self.assertEqual(resp.status_code, 404)

    async def test_deleting_recipe_removes_planner_entries_and_favorites(self):
        headers = self.auth(self.user)
        await self.client.post("/api/favorites", json={"recipeId": self.recipe.id}, headers=headers)
        await self.client.post(
            "/api/planner/entry",
            json={"recipeId": self.recipe.id, "dayOfWeek": 5, "mealType": "Dinner"},
            headers=headers,
        )

        await self.client.delete(f"/api/recipes/{self.recipe.id}", headers=self.auth(self.admin))

        resp = await self.client.get(f"/api/favorites/{self.user.id}", headers=headers)
        self.assertEqual(resp.json()["favorites"], [])
        resp = await self.client.get(f"/api/grocery/{self.user.id}", headers=headers)
        self.assertEqual(resp.json()["message"], "No recipes in weekly plan")

    async def test_update_missing_recipe(self):
        resp = await self.client.put("/api/recipes/9999", json={"title": "x"}, headers=self.auth(self.admin))
        self.assertEqual(resp.status_code, 404)


if __name__ == "__main__":
    unittest.main()
