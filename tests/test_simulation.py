"""Tests for the simulation engine, spawner, movement and inventory."""

import asyncio
import math
import random
import threading

import pytest

from goap_kernel.agents.inventory import Inventory
from goap_kernel.agents.roles import Cook, Customer, WaitStaff
from goap_kernel.execution.movement import StraightLineMovement
from goap_kernel.models.restaurant import Order, Seat
from goap_kernel.models.scheduler import SchedulerConfig
from goap_kernel.models.simulation import SimulationConfig, SpawnConfig
from goap_kernel.simulation.engine import CustomerSpawner, Simulation
from goap_kernel.simulation.layout import LANDMARKS


def _quiet_config(**overrides):
    """Seeded restaurant with no automatic arrivals and no replan delay."""
    values = dict(
        seed=42,
        wrong_order_probability=0.0,
        scheduler=SchedulerConfig(replan_cooldown_min=0.0, replan_cooldown_max=0.0),
        spawn=SpawnConfig(enabled=False),
    )
    values.update(overrides)
    return SimulationConfig(**values)


class TestStraightLineMovement:
    def test_no_destination(self):
        movement = StraightLineMovement()
        assert movement.remaining_distance == 0.0
        movement.advance(1.0)
        assert movement.position == (0.0, 0.0, 0.0)

    def test_advances_at_speed(self):
        movement = StraightLineMovement(speed=2.0)
        movement.set_destination((10.0, 0.0, 0.0))
        movement.advance(1.0)
        assert movement.position == pytest.approx((2.0, 0.0, 0.0))
        assert movement.remaining_distance == pytest.approx(8.0)

    def test_stops_short_of_destination(self):
        movement = StraightLineMovement(speed=100.0, stopping_distance=3.0)
        movement.set_destination((0.0, 0.0, 10.0))
        movement.advance(1.0)
        assert movement.remaining_distance == pytest.approx(3.0)

    def test_never_overshoots(self):
        movement = StraightLineMovement(position=(1.0, 0.0, 1.0), speed=50.0)
        movement.set_destination((4.0, 0.0, 5.0))
        movement.advance(1.0)
        assert math.isclose(movement.remaining_distance, 0.0, abs_tol=1e-9)
        assert not movement.path_pending


class TestInventory:
    def test_orders_removed_by_identity(self):
        inventory = Inventory()
        order = Order(ticket_number=1, food_items={1: "Burger"})
        twin = Order(ticket_number=1, food_items={1: "Burger"})
        inventory.add_order(order)

        assert inventory.has_order(order)
        assert not inventory.has_order(twin)
        assert inventory.remove_order(twin) is False
        assert inventory.remove_order(order) is True
        assert inventory.first_order() is None

    def test_first_order_is_oldest(self):
        inventory = Inventory()
        first = Order(ticket_number=1)
        inventory.add_order(first)
        inventory.add_order(Order(ticket_number=2))
        assert inventory.first_order() is first

    def test_find_items(self):
        inventory = Inventory()
        seat = Seat(name="Seat_3", table_number=3)
        inventory.add_item(seat)
        assert inventory.find_by_tag("Seat") is seat
        assert inventory.find_by_name("Seat_3") is seat
        assert inventory.find_by_name("Seat_1") is None
        assert inventory.remove_item(seat) is True
        assert inventory.items == []

    def test_to_dict(self):
        inventory = Inventory()
        inventory.add_item(Seat(name="Seat_1", table_number=1))
        inventory.add_order(Order(ticket_number=7, food_items={2: "Fries"}))
        data = inventory.to_dict()
        assert data["items"] == ["Seat_1"]
        assert data["orders"][0]["ticket_number"] == 7
        assert list(data["orders"][0]["food_items"].values()) == ["Fries"]


class TestCustomerSpawner:
    def _make_spawner(self, **overrides):
        values = dict(
            initial_delay=1.0,
            min_interval=2.0,
            max_interval=2.0,
            max_customers=2,
            global_cooldown=10.0,
            max_threshold=4,
        )
        values.update(overrides)
        return CustomerSpawner(SpawnConfig(**values), random.Random(0))

    def test_initial_delay(self):
        spawner = self._make_spawner()
        assert spawner.advance(0.5) == 0
        assert spawner.advance(0.5) == 1
        assert spawner.spawned == 1

    def test_cap_triggers_global_cooldown_and_doubles(self):
        spawner = self._make_spawner()
        spawner.advance(1.0)
        assert spawner.advance(2.0) == 1
        assert spawner.advance(2.0) == 0        # cap of 2 reached

        assert spawner.in_global_cooldown
        assert spawner.max_customers == 4
        assert not spawner.stopped

        assert spawner.advance(9.0) == 0
        assert spawner.advance(1.0) == 1        # cooldown over
        assert not spawner.in_global_cooldown
        assert spawner.spawned == 3

    def test_stops_past_threshold(self):
        spawner = self._make_spawner()
        total = sum(spawner.advance(1.0) for _ in range(200))

        assert total == 4
        assert spawner.stopped
        assert spawner.advance(1000.0) == 0

    def test_disabled(self):
        spawner = self._make_spawner(enabled=False)
        assert sum(spawner.advance(1.0) for _ in range(50)) == 0

    def test_intervals_within_range(self):
        spawner = CustomerSpawner(
            SpawnConfig(initial_delay=0.0, min_interval=2.0, max_interval=10.0),
            random.Random(5),
        )
        spawner.advance(0.0)
        assert 2.0 <= spawner._timer <= 10.0


class TestSimulation:
    def test_builds_restaurant(self):
        sim = Simulation(_quiet_config(seats=3, cooktops=2, cooks=2, wait_staff=1))

        assert [type(a) for a in sim.agents] == [Cook, Cook, WaitStaff]
        assert sim.registry.snapshot_facts() == {"Free_Seat": 3, "Free_CookTop": 2}
        for tag in LANDMARKS:
            assert sim.scene.find_with_tag(tag) is not None
        assert sim.get_agent("Cook_2").position == LANDMARKS["CookArea"]

    def test_seat_layout(self):
        sim = Simulation(_quiet_config(seats=5))
        seats = sim.layout.seats
        assert [s.table_number for s in seats] == [1, 2, 3, 4, 5]
        assert seats[0].position == (12.0, 0.0, 4.0)
        assert seats[0].staff_spot == (13.0, 0.0, 4.0)
        assert seats[4].position == (12.0, 0.0, 7.0)

    def test_spawn_customer_at_home(self):
        sim = Simulation(_quiet_config())
        customer = sim.spawn_customer()

        assert isinstance(customer, Customer)
        assert customer.name == "Customer_1"
        assert customer.position == LANDMARKS["Home"]
        assert sim.get_agent("Customer_1") is customer
        assert sim.scene.find_by_name("Customer_1") is customer

    def test_step_counts_time(self):
        sim = Simulation(_quiet_config(tick_seconds=0.2))
        sim.step()
        sim.step(0.3)
        assert sim.steps == 2
        assert sim.elapsed == pytest.approx(0.5)

    def test_negative_dt_rejected(self):
        with pytest.raises(ValueError):
            Simulation(_quiet_config()).step(-1.0)

    def test_staff_idle_without_work(self):
        sim = Simulation(_quiet_config())
        sim.run(50)

        cook = sim.get_agent("Cook_1")
        staff = sim.get_agent("WaitStaff_1")
        assert cook.idle_locked
        assert staff.idle_locked
        assert sim.registry.snapshot_facts() == {"Free_Seat": 4, "Free_CookTop": 2}

    def test_customer_served_end_to_end(self):
        """One customer is seated, served, fed and goes home satisfied."""
        sim = Simulation(_quiet_config())
        customer = sim.spawn_customer()

        saw_order_queued = False
        for _ in range(5000):
            sim.step()
            if sim.registry.orders.items() or sim.registry.ready_orders.items():
                saw_order_queued = True
            if sim.customers_departed:
                break

        assert customer.destroyed
        assert saw_order_queued
        assert sim.customers_departed == 1
        assert sim.get_agent("Customer_1") is None
        assert sim.registry.snapshot_facts() == {
            "Free_Seat": 4,
            "Free_CookTop": 2,
            "Customer_Satisfied": 1,
        }
        assert sim.registry.queue_sizes() == {
            "customers": 0,
            "seats": 4,
            "cooktops": 2,
            "orders": 0,
            "ready_orders": 0,
        }
        assert not any(seat.is_reserved for seat in sim.layout.seats)

    def test_full_restaurant_sends_customer_home(self):
        sim = Simulation(_quiet_config(seats=0))
        sim.spawn_customer()

        for _ in range(2000):
            sim.step()
            if sim.customers_departed:
                break

        facts = sim.registry.snapshot_facts()
        assert sim.customers_departed == 1
        assert facts.get("Restaurant_Full") == 1
        assert "Customer_Satisfied" not in facts

    def test_seeded_runs_are_identical(self):
        config = dict(seed=7, spawn=SpawnConfig(initial_delay=1.0, max_interval=4.0))
        first = Simulation(SimulationConfig(**config))
        second = Simulation(SimulationConfig(**config))

        first.run(600)
        second.run(600)

        assert first.summary() == second.summary()
        assert first.customers_spawned > 0

    def test_update_scheduler_config(self):
        sim = Simulation(_quiet_config())
        sim.spawn_customer()
        new_config = SchedulerConfig(replan_cooldown_min=1.0, replan_cooldown_max=2.0)

        sim.update_scheduler_config(new_config)

        assert sim.scheduler_config == new_config
        assert all(agent.config is new_config for agent in sim.agents)

    def test_summary(self):
        sim = Simulation(_quiet_config())
        sim.spawn_customer()
        summary = sim.summary()
        assert summary["status"] == "stopped"
        assert summary["agents"] == {"Cook": 1, "WaitStaff": 1, "Customer": 1}
        assert summary["customers_spawned"] == 1

    def test_run_async_stops_on_event(self):
        sim = Simulation(_quiet_config(tick_seconds=0.01))

        async def drive():
            stop = asyncio.Event()
            task = asyncio.create_task(sim.run_async(stop))
            await asyncio.sleep(0.05)
            assert sim.status == "running"
            stop.set()
            await task

        asyncio.run(drive())
        assert sim.steps >= 1
        assert sim.status == "stopped"


class TestConcurrentStepping:
    """Steps driven from several threads at once behave like serial steps."""

    def _make_busy_simulation(self, seed):
        return Simulation(SimulationConfig(
            seed=seed,
            cooks=3,
            wait_staff=3,
            spawn=SpawnConfig(initial_delay=0.2, min_interval=0.2, max_interval=1.0),
        ))

    def _drive(self, target, threads=8, rounds=40):
        errors = []

        def worker():
            try:
                for _ in range(rounds):
                    target()
            except Exception as exc:  # collected and asserted below
                errors.append(exc)

        pool = [threading.Thread(target=worker) for _ in range(threads)]
        for thread in pool:
            thread.start()
        for thread in pool:
            thread.join()
        return errors

    @pytest.mark.parametrize("seed", [0, 1, 2])
    def test_parallel_steps_do_not_corrupt_agents(self, seed):
        sim = self._make_busy_simulation(seed)

        errors = self._drive(lambda: sim.run(10, 0.2), threads=8, rounds=10)

        assert errors == []
        assert sim.steps == 8 * 10 * 10
        assert sim.elapsed == pytest.approx(8 * 10 * 10 * 0.2)
        assert sim.customers_spawned > 0

    def test_agent_step_from_many_threads(self):
        sim = self._make_busy_simulation(3)
        sim.run(100, 0.2)
        agents = list(sim.agents)

        def step_all():
            for agent in agents:
                agent.step(0.2)

        assert self._drive(step_all, threads=6, rounds=50) == []

    def test_reads_while_stepping(self):
        sim = self._make_busy_simulation(4)
        done = threading.Event()
        errors = []

        def reader():
            try:
                while not done.is_set():
                    sim.describe_agents()
                    sim.summary()
            except Exception as exc:  # collected and asserted below
                errors.append(exc)

        thread = threading.Thread(target=reader)
        thread.start()
        try:
            errors.extend(self._drive(lambda: sim.step(0.2), threads=4, rounds=100))
        finally:
            done.set()
            thread.join()

        assert errors == []
        assert sim.steps == 400
