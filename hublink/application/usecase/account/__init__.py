"""Account linking use cases."""

from .get_associations import GetAssociationsUseCase
from .unlink import UnlinkUseCase

__all__ = ["GetAssociationsUseCase", "UnlinkUseCase"]
