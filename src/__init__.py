"""
Setting Scan - configuration-setting metadata extraction for Java codebases.

This package finds ``Setting<T>`` field declarations in syntax trees and
recovers each setting's key, value type, default value and property flags.
"""

__version__ = "1.0.0"
