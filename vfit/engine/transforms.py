"""Pose/transform composition for worn garments."""

from ..models import AvatarPose, LocalOffset, WorldTransform


def compose_transform(pose: AvatarPose, offset: LocalOffset) -> WorldTransform:
    """Combine the avatar pose with a garment's local offset.

    Offsets are defined in avatar-local, axis-aligned space, so position and
    rotation are plain componentwise sums (the offset is not rotated into the
    pose frame). The pose carries no scale; the offset's scale passes through.
    """
    return WorldTransform(
        position=pose.position + offset.position,
        rotation=pose.rotation + offset.rotation,
        scale=offset.scale,
    )
