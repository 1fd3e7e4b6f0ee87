"""
pomtrace: Maven dependency tree and version-origin explorer.

Parses ``mvn dependency:tree -Dverbose`` reports into an immutable graph and
resolves where in the POM hierarchy each dependency's version originates.
"""

__version__ = "0.1.0"
