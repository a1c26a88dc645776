"""
Simulation Engine — drives every agent one step at a time.

Each step:
  1. advance each live agent's movement, then its scheduler (one agent at a
     time, so commit hooks never interleave)
  2. let the spawner bring in new customers
  3. drop agents that have left the scene

The engine owns the registry, scene and menu for one restaurant. Nothing
is shared between simulations.
"""

import asyncio
import logging
import random
from typing import Dict, List, Optional, Type

from goap_kernel.agents.agent import Agent
from goap_kernel.agents.roles import Cook, Customer, RoleAgent, WaitStaff
from goap_kernel.execution.movement import StraightLineMovement
from goap_kernel.models.scheduler import SchedulerConfig
from goap_kernel.models.simulation import SimulationConfig, SpawnConfig
from goap_kernel.simulation.layout import build_restaurant
from goap_kernel.strategy.planner import Planner
from goap_kernel.world_model.registry import ResourceRegistry
from goap_kernel.world_model.scene import Scene

logger = logging.getLogger(__name__)


class CustomerSpawner:
    """
    Timed customer arrivals.

    Spawns at random intervals until the cap is reached, then pauses for a
    global cooldown and doubles the cap. Stops for good once the cap passes
    the configured threshold.
    """

    def __init__(self, config: SpawnConfig, rng: random.Random):
        self.config = config
        self.rng = rng
        self.max_customers = config.max_customers
        self.spawned = 0
        self.stopped = False
        self._timer = config.initial_delay
        self._in_global_cooldown = False

    @property
    def in_global_cooldown(self) -> bool:
        return self._in_global_cooldown

    def advance(self, dt: float) -> int:
        """Advance the spawn timer. Returns how many customers to spawn now."""
        if not self.config.enabled or self.stopped:
            return 0

        self._timer -= dt
        if self._timer > 0:
            return 0

        self._in_global_cooldown = False
        return self._attempt_spawn()

    def _attempt_spawn(self) -> int:
        if self.spawned < self.max_customers:
            self.spawned += 1
            self._timer = self.rng.uniform(
                self.config.min_interval, self.config.max_interval
            )
            return 1

        logger.info("Restaurant booked! Pausing arrivals for %.0fs", self.config.global_cooldown)
        self._in_global_cooldown = True
        self._timer = self.config.global_cooldown
        self.max_customers *= 2
        if self.max_customers > self.config.max_threshold:
            logger.info("Spawn cap exceeded %d; no more customers", self.config.max_threshold)
            self.stopped = True
        return 0


class Simulation:
    """
    A restaurant full of GOAP agents.

    Every public method holds the registry lock, so concurrent callers only
    ever observe whole steps.
    """

    def __init__(self, config: Optional[SimulationConfig] = None):
        self.config = config or SimulationConfig()
        self.rng = random.Random(self.config.seed)

        self.registry = ResourceRegistry()
        self.lock = self.registry.lock
        self.scene = Scene()
        self.planner = Planner(self.registry)
        self.layout = build_restaurant(self.registry, self.scene, self.config)
        self.spawner = CustomerSpawner(self.config.spawn, self.rng)

        self.agents: List[Agent] = []
        self.steps = 0
        self.elapsed = 0.0
        self.customers_spawned = 0
        self.customers_departed = 0
        self._running = False

        for i in range(self.config.cooks):
            self._add_agent(Cook, f"Cook_{i + 1}", "CookArea")
        for i in range(self.config.wait_staff):
            self._add_agent(
                WaitStaff, f"WaitStaff_{i + 1}", "WaitArea",
                menu=self.config.menu,
                wrong_order_probability=self.config.wrong_order_probability,
                max_order_items=self.config.max_order_items,
            )

    @property
    def scheduler_config(self) -> SchedulerConfig:
        return self.config.scheduler

    @property
    def status(self) -> str:
        return "running" if self._running else "stopped"

    def _add_agent(self, cls: Type[RoleAgent], name: str, start_tag: str, **kwargs) -> RoleAgent:
        movement = StraightLineMovement(
            position=self.layout.position_of(start_tag),
            speed=self.config.walk_speed,
        )
        agent = cls(
            name, self.registry, self.scene, movement,
            config=self.config.scheduler,
            planner=self.planner,
            rng=random.Random(self.rng.random()),
            **kwargs,
        )
        self.scene.add(agent)
        self.agents.append(agent)
        return agent

    def spawn_customer(self) -> Customer:
        """Bring a new customer in at the spawn point."""
        with self.lock:
            self.customers_spawned += 1
            customer = self._add_agent(Customer, f"Customer_{self.customers_spawned}", "Home")
            logger.info("Spawned %s (%d so far)", customer.name, self.customers_spawned)
        return customer

    def get_agent(self, name: str) -> Optional[Agent]:
        with self.lock:
            return next((a for a in self.agents if a.name == name), None)

    def describe_agents(self) -> List[Dict]:
        """Consistent view of every live agent."""
        with self.lock:
            return [a.describe() for a in self.agents]

    def describe_agent(self, name: str) -> Optional[Dict]:
        with self.lock:
            agent = self.get_agent(name)
            return agent.describe() if agent is not None else None

    def update_scheduler_config(self, config: SchedulerConfig) -> None:
        """Apply a new scheduler configuration to every agent."""
        with self.lock:
            self.config.scheduler = config
            for agent in self.agents:
                agent.config = config

    def step(self, dt: Optional[float] = None) -> None:
        """Advance the whole restaurant by ``dt`` seconds (default: one tick)."""
        if dt is None:
            dt = self.config.tick_seconds
        if dt < 0:
            raise ValueError(f"dt must be non-negative, got {dt}")

        with self.lock:
            for agent in list(self.agents):
                if agent.destroyed:
                    continue
                agent.movement.advance(dt)
                agent.step(dt)

            for _ in range(self.spawner.advance(dt)):
                self.spawn_customer()

            live = [a for a in self.agents if not a.destroyed]
            self.customers_departed += len(self.agents) - len(live)
            self.agents = live

            self.steps += 1
            self.elapsed += dt

    def run(self, steps: int, dt: Optional[float] = None) -> None:
        """Advance ``steps`` ticks with no other caller interleaving."""
        with self.lock:
            for _ in range(steps):
                self.step(dt)

    def summary(self) -> Dict:
        """Counts and facts for inspection."""
        with self.lock:
            by_tag: Dict[str, int] = {}
            for agent in self.agents:
                by_tag[agent.tag] = by_tag.get(agent.tag, 0) + 1
            return {
                "status": self.status,
                "steps": self.steps,
                "elapsed_seconds": round(self.elapsed, 3),
                "agents": by_tag,
                "customers_spawned": self.customers_spawned,
                "customers_departed": self.customers_departed,
                "facts": self.registry.snapshot_facts(),
                "queues": self.registry.queue_sizes(),
            }

    async def run_async(self, stop_event: Optional[asyncio.Event] = None) -> None:
        """Step the simulation in real time until ``stop_event`` is set."""
        self._running = True
        if stop_event is None:
            stop_event = asyncio.Event()

        try:
            while not stop_event.is_set():
                self.step()
                try:
                    await asyncio.wait_for(
                        stop_event.wait(),
                        timeout=self.config.tick_seconds,
                    )
                except asyncio.TimeoutError:
                    continue
        finally:
            self._running = False
