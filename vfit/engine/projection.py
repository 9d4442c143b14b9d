"""Projection of engine state into a render list."""

from ..models import AvatarPose, Category, EngineState, Garment, LocalOffset, RenderInstruction
from .transforms import compose_transform


def project(state: EngineState) -> list[RenderInstruction]:
    """Build the render list for the external renderer.

    The avatar always comes first, followed by worn garments in category
    declaration order, so the list order is stable for unchanged state.
    Physics hints are forwarded only while physics is enabled.
    """
    instructions = [
        RenderInstruction(
            model_ref=state.avatar_model_ref,
            transform=compose_transform(state.pose, LocalOffset.identity()),
        )
    ]

    for category in Category:
        garment = state.worn.get(category)
        if garment is None:
            continue
        instructions.append(_garment_instruction(garment, state.pose, state.physics_enabled))

    return instructions


def preview(garment: Garment, physics_enabled: bool = False) -> RenderInstruction:
    """Render a single garment on its own, as in a catalog preview tile."""
    return _garment_instruction(garment, AvatarPose(), physics_enabled)


def _garment_instruction(garment: Garment, pose: AvatarPose, physics_enabled: bool) -> RenderInstruction:
    return RenderInstruction(
        model_ref=garment.model_ref,
        transform=compose_transform(pose, garment.local_offset),
        physics_hints=garment.physics_hints if physics_enabled else None,
        garment_id=garment.id,
        category=garment.category,
    )
