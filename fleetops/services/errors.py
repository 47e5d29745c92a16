"""Erreurs du moteur de facturation / Billing engine errors."""

from datetime import date


class InvalidWindowError(ValueError):
    """Fenetre d'evaluation inversee / Inverted evaluation window (start > end).

    Bug de l'appelant, pas une condition metier : l'appelant doit valider avant.
    A caller bug, not a business condition: callers validate before invoking.
    """

    def __init__(self, window_start: date, window_end: date):
        self.window_start = window_start
        self.window_end = window_end
        super().__init__(f"window start {window_start.isoformat()} is after window end {window_end.isoformat()}")


def check_window(window_start: date, window_end: date) -> None:
    """Lever InvalidWindowError si start > end / Raise InvalidWindowError if start > end."""
    if window_start > window_end:
        raise InvalidWindowError(window_start, window_end)
