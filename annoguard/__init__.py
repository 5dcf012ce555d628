"""
AnnoGuard — Layer behaviors for annotation editing.

Structural invariants (such as "an annotation must not cross a sentence
boundary") are declared once as behaviors and applied uniformly at
creation, rendering and validation time.
"""

__version__ = "0.1.0"
