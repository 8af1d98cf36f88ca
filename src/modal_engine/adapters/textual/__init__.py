"""Textual host adapter."""

from .controller import TextualModalAdapter, TextualUIHooks, translate_textual_key

__all__ = ["TextualModalAdapter", "TextualUIHooks", "translate_textual_key"]
