"""Build pipeline for single-file Ruby 2D applications.

Turns one application source file into a native executable (mruby
bytecode linked against the Simple 2D runtime), a browser bundle
(Opal-transpiled JavaScript), and an optional macOS application bundle.
"""

__version__ = "1.0.0"
