"""Application-wide constants for the icon sprite builder.

This module centralizes the constants used throughout the application to
ensure consistency and maintainability. Constants are grouped into the
following categories:
- Path Constants: Names of configuration directories and files
- Markup Constants: XML namespaces and well-known SVG attribute values
- Optimizer Constants: Plugin names and serialization defaults
- Loading Constants: Concurrency limits for reading input files
- Logging Constants: Size factors for rotating log files
"""

# Path constants
APP_DIR_NAME = "iconsprite"  # Directory name under the user config dir
CONFIG_FILENAME = "iconsprite.yaml"  # Configuration file searched by default
SVG_EXTENSION = ".svg"  # Only files with this exact suffix are compiled

# Markup constants
SVG_NAMESPACE = "http://www.w3.org/2000/svg"
XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"
CURRENT_COLOR = "currentColor"  # Paint value inherited from the <use> context
SYMBOL_TAG = "symbol"

# Optimizer constants
PRESET_DEFAULT = "preset-default"  # Name of the bundled plugin preset
DEFAULT_INDENT = "\t"  # Indentation unit for pretty-printed sprites

# Loading constants
DEFAULT_MAX_CONCURRENT_LOADS = 8  # Maximum input files read/minified at once

# Logging constants
BYTES_PER_MEGABYTE = 1024 * 1024
