"""
Message Reconstructor.

Merges the three beacons' fragment lists into one message. Each list holds
the words one beacon overheard, by position; gaps are "" or None, and a list
may be shorter than the original message.

Tie-break: lists are scanned in the order given (always Kenobi, Skywalker,
Sato). At each index the first non-empty word wins, even if a later beacon
reports a different word there.
"""

from typing import List, Optional, Sequence
import logging

logger = logging.getLogger(__name__)


class MessageReconstructor:
    """
    Reconstruct a message from per-beacon fragments.

    Usage:
        reconstructor = MessageReconstructor()
        reconstructor.reconstruct([
            ["this", "", "", "mensaje", ""],
            ["", "es", "", "", "secreto"],
            ["este", "", "un", "", ""],
        ])
        # -> "this es un mensaje secreto"
    """

    def reconstruct(self, fragment_lists: Sequence[Sequence[Optional[str]]]) -> str:
        """
        Merge fragment lists into a single space-separated message.

        Args:
            fragment_lists: One fragment sequence per beacon, in priority order

        Returns:
            Reconstructed message ("" if no index has a word)
        """
        max_len = max((len(fragments) for fragments in fragment_lists), default=0)

        words: List[str] = []
        for i in range(max_len):
            word = self._pick_word(fragment_lists, i)
            if word is not None:
                words.append(word)

        message = " ".join(words)
        logger.debug("Reconstructed %d/%d positions: %r", len(words), max_len, message)
        return message

    @staticmethod
    def _pick_word(fragment_lists: Sequence[Sequence[Optional[str]]], index: int) -> Optional[str]:
        """First non-empty word at index, scanning lists in priority order."""
        for fragments in fragment_lists:
            if index < len(fragments) and fragments[index]:
                return fragments[index]
        return None
