"""Modal screens for the end-of-day flow.

Both modals follow Textual's ModalScreen pattern:
- Inherit from ModalScreen[ReturnType] for typed return values
- Dismiss with dismiss(value) to hand the result back to the app
"""

from .scripts.leaderboard_modal import LeaderboardModal
from .scripts.name_entry_modal import NameEntryModal

__all__ = ["LeaderboardModal", "NameEntryModal"]
