import unittest
from datetime import timedelta
from unittest.mock import patch

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from mealflow.models.planner import WeeklyPlan
from mealflow.services import planner as planner_service
from mealflow.services.planner import get_or_create_weekly_plan
from mealflow.tests.base import ApiTestCase
from mealflow.utils.week import get_week_bounds


class TestPlannerAPI(ApiTestCase):

    async def asyncSetUp(self):
        await super().asyncSetUp()
        self.admin = await self.create_admin()
        self.user = await self.create_user("planner@example.com")
        self.other = await self.create_user("other@example.com")
        self.recipe = await self.create_recipe(
            self.admin,
            title="Porridge",
            ingredients=[{"name": "Milk", "quantity": 1, "category": "Dairy", "unit": "cups"}],
        )

    async def _add(self, day, meal, user=None):
        return await self.client.post(
            "/api/planner/entry",
            json={"recipeId": self.recipe.id, "dayOfWeek": day, "mealType": meal},
            headers=self.auth(user or self.user),
        )

    async def _plan_count(self) -> int:
        async with self.pool() as session:
            return await session.scalar(select(func.count()).select_from(WeeklyPlan))

    async def test_weekly_plan_created_lazily(self):
        self.assertEqual(await self._plan_count(), 0)

        resp = await self.client.get(f"/api/planner/weekly/{self.user.id}", headers=self.auth(self.user))
        self.assertEqual(resp.status_code, 200)
        plan = resp.json()["weeklyPlan"]
        self.assertEqual(plan["weekStart"], "2025-03-10T00:00:00")
        self.assertEqual(plan["plannerEntries"], [])
        self.assertEqual(plan["userId"], self.user.id)

        # the same plan is returned on the next read
        resp = await self.client.get(f"/api/planner/weekly/{self.user.id}", headers=self.auth(self.user))
        self.assertEqual(resp.json()["weeklyPlan"]["id"], plan["id"])
        self.assertEqual(await self._plan_count(), 1)

    async def test_new_week_gets_new_plan(self):
        await self.client.get(f"/api/planner/weekly/{self.user.id}", headers=self.auth(self.user))
        self.reference_time = self.reference_time + timedelta(days=7)
        resp = await self.client.get(f"/api/planner/weekly/{self.user.id}", headers=self.auth(self.user))

        self.assertEqual(resp.json()["weeklyPlan"]["weekStart"], "2025-03-17T00:00:00")
        self.assertEqual(await self._plan_count(), 2)

    async def test_get_or_create_returns_existing_plan(self):
        async with self.pool() as session:
            first = await get_or_create_weekly_plan(session, self.user.id, self.reference_time)
        async with self.pool() as session:
            second = await get_or_create_weekly_plan(
                session, self.user.id, self.reference_time + timedelta(days=2)
            )
        self.assertEqual(first.id, second.id)

    async def test_get_or_create_reuses_plan_created_concurrently(self):
        week_start, week_end = get_week_bounds(self.reference_time)
        find_plan = planner_service._find_plan
        created = {}

        async def miss_once(db, *args, **kwargs):
            if created:
                return await find_plan(db, *args, **kwargs)
            # another request inserts the plan between our lookup and our insert
            async with self.pool() as other:
                plan = WeeklyPlan(user_id=self.user.id, week_start=week_start, week_end=week_end)
                other.add(plan)
                await other.commit()
                created["id"] = plan.id
            return None

        with patch.object(planner_service, "_find_plan", new=miss_once):
            async with self.pool() as session:
                plan = await get_or_create_weekly_plan(session, self.user.id, self.reference_time)

        self.assertEqual(plan.id, created["id"])
        self.assertEqual(await self._plan_count(), 1)

    async def test_get_or_create_for_missing_user_fails(self):
        async with self.pool() as session:
            with self.assertRaises(IntegrityError):
                await get_or_create_weekly_plan(session, 9999, self.reference_time)
        self.assertEqual(await self._plan_count(), 0)

    async def test_add_entry(self):
        resp = await self._add(1, "Lunch")
        self.assertEqual(resp.status_code, 201)
        data = resp.json()
        self.assertEqual(data["message"], "Recipe added to planner")

        entry = data["plannerEntry"]
        self.assertEqual(entry["dayOfWeek"], 1)
        self.assertEqual(entry["mealType"], "Lunch")
        self.assertEqual(entry["recipe"]["title"], "Porridge")
        self.assertEqual(entry["recipe"]["recipeIngredients"][0]["ingredient"]["name"], "Milk")

    async def test_slot_may_hold_several_recipes(self):
        await self._add(0, "Breakfast")
        await self._add(0, "Breakfast")

        resp = await self.client.get(f"/api/planner/weekly/{self.user.id}", headers=self.auth(self.user))
        self.assertEqual(len(resp.json()["weeklyPlan"]["plannerEntries"]), 2)

    async def test_entries_ordered_by_day_then_meal(self):
        await self._add(2, "Dinner")
        await self._add(0, "Snack")
        await self._add(0, "Breakfast")
        await self._add(2, "Breakfast")
        await self._add(0, "Lunch")

        resp = await self.client.get(f"/api/planner/weekly/{self.user.id}", headers=self.auth(self.user))
        slots = [(e["dayOfWeek"], e["mealType"]) for e in resp.json()["weeklyPlan"]["plannerEntries"]]
        self.assertEqual(
            slots,
            [(0, "Breakfast"), (0, "Lunch"), (0, "Snack"), (2, "Breakfast"), (2, "Dinner")],
        )

    async def test_invalid_day_and_meal(self):
        resp = await self._add(7, "Lunch")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"][0]["field"], "dayOfWeek")

        resp = await self._add(1, "Brunch")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"][0]["field"], "mealType")

    async def test_unknown_recipe(self):
        resp = await self.client.post(
            "/api/planner/entry",
            json={"recipeId": 9999, "dayOfWeek": 0, "mealType": "Lunch"},
            headers=self.auth(self.user),
        )
        self.assertEqual(resp.status_code, 404)

    async def test_update_entry(self):
        entry_id = (await self._add(0, "Breakfast")).json()["plannerEntry"]["id"]

        resp = await self.client.put(
            f"/api/planner/entry/{entry_id}",
            json={"dayOfWeek": 4, "mealType": "Dinner"},
            headers=self.auth(self.user),
        )
        self.assertEqual(resp.status_code, 200)
        entry = resp.json()["plannerEntry"]
        self.assertEqual((entry["dayOfWeek"], entry["mealType"]), (4, "Dinner"))

        # partial update keeps the day
        resp = await self.client.put(
            f"/api/planner/entry/{entry_id}",
            json={"mealType": "Snack"},
            headers=self.auth(self.user),
        )
        entry = resp.json()["plannerEntry"]
        self.assertEqual((entry["dayOfWeek"], entry["mealType"]), (4, "Snack"))

    async def test_delete_entry(self):
        entry_id = (await self._add(3, "Lunch")).json()["plannerEntry"]["id"]

        resp = await self.client.delete(f"/api/planner/entry/{entry_id}", headers=self.auth(self.user))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["message"], "Recipe removed from planner")

        resp = await self.client.get(f"/api/planner/weekly/{self.user.id}", headers=self.auth(self.user))
        self.assertEqual(resp.json()["weeklyPlan"]["plannerEntries"], [])

        resp = await self.client.delete(f"/api/planner/entry/{entry_id}", headers=self.auth(self.user))
        self.assertEqual(resp.status_code, 404)

    async def test_other_users_plan_and_entries_are_forbidden(self):
        entry_id = (await self._add(0, "Lunch")).json()["plannerEntry"]["id"]

        resp = await self.client.get(f"/api/planner/weekly/{self.user.id}", headers=self.auth(self.other))
        self.assertEqual(resp.status_code, 403)

        resp = await self.client.put(
            f"/api/planner/entry/{entry_id}",
            json={"dayOfWeek": 1},
            headers=self.auth(self.other),
        )
        self.assertEqual(resp.status_code, 403)

        resp = await self.client.delete(f"/api/planner/entry/{entry_id}", headers=self.auth(self.other))
        self.assertEqual(resp.status_code, 403)

    async def test_missing_entry(self):
        resp = await self.client.put(
            "/api/planner/entry/9999",
            json={"dayOfWeek": 1},
            headers=self.auth(self.user),
        )
        self.assertEqual(resp.status_code, 404)


if __name__ == "__main__":
    unittest.main()
