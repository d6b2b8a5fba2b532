"""
Faerie Sprite Editor - Edits configuration metadata of custom game sprites.

Modules:
    core: Sprite model, behavior record, display data and providers
    formats: Line-oriented (.cfg) and structured (.json) configuration codecs
    palette: 15-bit hardware palette and its binary file formats
    i18n: Internationalization of error and warning messages
"""

__version__ = "1.0.0"
__license__ = "MIT"
