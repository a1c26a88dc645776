"""Restaurant layout — landmarks, seats and cooktops."""

from typing import Dict, List

from goap_kernel.models.restaurant import CookTop, SceneObject, Seat
from goap_kernel.models.simulation import SimulationConfig
from goap_kernel.world_model.registry import ResourceRegistry
from goap_kernel.world_model.scene import Scene

SEATS_PER_ROW = 4

LANDMARKS: Dict[str, tuple] = {
    "Home": (0.0, 0.0, 0.0),
    "Restaurant": (10.0, 0.0, 0.0),
    "CheckIn": (14.0, 0.0, 0.0),
    "ReceptionStaff": (15.0, 0.0, 1.0),
    "WaitArea": (16.0, 0.0, 4.0),
    "KitchenWindow": (20.0, 0.0, 8.0),
    "CookArea": (22.0, 0.0, 10.0),
}


class RestaurantLayout:
    """Everything placed by ``build_restaurant``."""

    def __init__(
        self,
        landmarks: Dict[str, SceneObject],
        seats: List[Seat],
        cooktops: List[CookTop],
    ):
        self.landmarks = landmarks
        self.seats = seats
        self.cooktops = cooktops

    def position_of(self, tag: str) -> tuple:
        return self.landmarks[tag].position


def build_restaurant(
    registry: ResourceRegistry,
    scene: Scene,
    config: SimulationConfig,
) -> RestaurantLayout:
    """Place the restaurant in the scene and register its resources."""
    landmarks = {}
    for tag, position in LANDMARKS.items():
        landmarks[tag] = scene.add(SceneObject(name=tag, tag=tag, position=position))

    seats = []
    for i in range(config.seats):
        x = 12.0 + 2.0 * (i % SEATS_PER_ROW)
        z = 4.0 + 3.0 * (i // SEATS_PER_ROW)
        seat = Seat(
            name=f"Seat_{i + 1}",
            table_number=i + 1,
            position=(x, 0.0, z),
            staff_spot=(x + 1.0, 0.0, z),
        )
        scene.add(seat)
        registry.add_seat(seat)
        seats.append(seat)

    cooktops = []
    for i in range(config.cooktops):
        cooktop = CookTop(name=f"CookTop_{i + 1}", position=(22.0 + 2.0 * i, 0.0, 12.0))
        scene.add(cooktop)
        registry.add_cooktop(cooktop)
        cooktops.append(cooktop)

    return RestaurantLayout(landmarks, seats, cooktops)
