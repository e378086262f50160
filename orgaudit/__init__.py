"""orgaudit — organizational roster analysis.

Flags managers paid outside their policy band and employees whose
reporting line to the CEO is too long.
"""

__version__ = "1.0.0"
