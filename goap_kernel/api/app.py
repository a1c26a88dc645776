"""
GOAP Kernel API — FastAPI endpoints.

Exposes a running restaurant simulation for inspection and control:
- World facts and resource queues
- Agent state (goals, plan, beliefs, inventory)
- Stepping the simulation and spawning customers
- Scheduler configuration

While the app is served the simulation ticks in real time on the event
loop. Request handlers run in FastAPI's threadpool; the simulation's lock
keeps them from interleaving with the heartbeat or with each other.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from goap_kernel.models.scheduler import SchedulerConfig
from goap_kernel.models.simulation import SimulationConfig
from goap_kernel.simulation.engine import Simulation


# --- Request/Response Models ---

class StepRequest(BaseModel):
    steps: int = Field(ge=1, le=10000, default=1)
    dt: Optional[float] = Field(ge=0, default=None)


# --- Application Factory ---

def create_app(
    simulation: Optional[Simulation] = None,
    config: Optional[SimulationConfig] = None,
    heartbeat: bool = True,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    With ``heartbeat`` the simulation runs ``run_async`` for the lifetime
    of the app and stops on shutdown.
    """

    app = FastAPI(
        title="GOAP Kernel API",
        description="Goal-Oriented Action Planning — Restaurant Simulation",
        version="0.1.0",
    )

    sim = simulation or Simulation(config)

    # Store components on app state for access in endpoints
    app.state.simulation = sim

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Run the simulation heartbeat between startup and shutdown."""
        if not heartbeat:
            yield
            return
        stop = asyncio.Event()
        task = asyncio.create_task(sim.run_async(stop))
        await asyncio.sleep(0)              # let the heartbeat mark itself running
        try:
            yield
        finally:
            stop.set()
            await task

    app.router.lifespan_context = lifespan

    # === WORLD STATE ===

    @app.get("/world/facts")
    def get_world_facts():
        """Current world facts."""
        return sim.registry.snapshot_facts()

    @app.get("/world/queues")
    def get_world_queues():
        """Sizes of the shared resource queues."""
        return sim.registry.queue_sizes()

    # === AGENTS ===

    @app.get("/agents")
    def list_agents():
        """All live agents."""
        return sim.describe_agents()

    @app.get("/agents/{name}")
    def get_agent(name: str):
        """A specific agent's goals, plan, beliefs and inventory."""
        info = sim.describe_agent(name)
        if info is None:
            raise HTTPException(404, "Agent not found")
        return info

    # === SIMULATION ===

    @app.get("/simulation/status")
    def simulation_status():
        """Heartbeat status, counts, facts and queues."""
        return sim.summary()

    @app.post("/simulation/step")
    def step_simulation(req: StepRequest):
        """Advance the simulation (for testing and debugging)."""
        with sim.lock:
            sim.run(req.steps, req.dt)
            return sim.summary()

    @app.post("/simulation/spawn")
    def spawn_customer():
        """Bring in a customer now, outside the spawn cadence."""
        with sim.lock:
            customer = sim.spawn_customer()
            return customer.describe()

    # === SCHEDULER ===

    @app.get("/scheduler/config")
    def get_scheduler_config():
        """Current scheduler configuration."""
        return sim.scheduler_config.model_dump()

    @app.put("/scheduler/config")
    def update_scheduler_config(config: SchedulerConfig):
        """Update the scheduler configuration for every agent."""
        sim.update_scheduler_config(config)
        return config.model_dump()

    return app


# Default application instance
app = create_app()
