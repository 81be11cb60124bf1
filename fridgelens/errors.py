"""Error taxonomy for FridgeLens.

Every recoverable failure carries a localized, user-facing ``message`` that
the state machine shows as a toast. ``TransitionError`` is different: it
signals a trigger used from the wrong state, which is a programming error.
"""

from __future__ import annotations


class FridgeLensError(RuntimeError):
    """Base class for errors that end up in front of the user."""

    default_message = "Bir hata oluştu."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class CameraAccessError(FridgeLensError):
    """The camera could not be opened or did not deliver a frame."""

    default_message = "Kameraya erişilemedi. Lütfen dosya yüklemeyi deneyin."


class AnalysisError(FridgeLensError):
    """Ingredient extraction failed or returned unusable data."""

    default_message = "Görüntü analiz edilemedi. Lütfen tekrar deneyin."


class RecipeGenerationError(FridgeLensError):
    """Recipe generation failed or returned unusable data."""

    default_message = "Tarifler oluşturulamadı. Lütfen tekrar deneyin."


class ShareExportError(FridgeLensError):
    """Rendering the recipe card or handing it to a share target failed."""

    default_message = "Paylaşım sırasında bir hata oluştu."


class TransitionError(RuntimeError):
    """A trigger was used from a state that does not allow it."""
