"""Shared constants for propcheck.

This module contains constants that are used across multiple modules
to avoid duplication and ensure consistency.
"""

# =============================================================================
# Diagnostics
# =============================================================================

# Tag prefixed to every diagnostic line
PLUGIN_NAME = "propcheck"

# Sentinel file name some hosts pass when the source has no path
UNKNOWN_FILE_NAME = "unknown"

# =============================================================================
# Generated Code
# =============================================================================

# Module providing the runtime validator (default export)
VALIDATOR_MODULE = "prop-types/checkPropTypes"

# Local name the validator import is bound to
VALIDATOR_IDENTIFIER = "_checkPropTypes"

# Parameter synthesized for arrow components without a usable first parameter
PROPS_IDENTIFIER = "_props"

# Props expression for ordinary functions (first positional argument)
FUNCTION_PROPS_EXPRESSION = "arguments[0]"

# Props expression and schema reference inside class render methods
CLASS_PROPS_EXPRESSION = "this.props"
CLASS_PROP_TYPES_REFERENCE = "this.constructor.propTypes"

# Location argument passed to the validator
PROP_LOCATION = "prop"

# =============================================================================
# Base Classes
# =============================================================================

# Namespace whose qualified built-ins bypass the configurable allow-list
REACT_NAMESPACE = "React"

# Built-in component base classes (always accepted)
REACT_CLASS_COMPONENT_EXTENDS = ("Component", "PureComponent")

# Instance method receiving the validation call in class components
RENDER_METHOD = "render"

# Property whose assignment marks a component candidate
PROP_TYPES_PROPERTY = "propTypes"

# Arguments of an injected validation call (schema, props, location, name)
VALIDATOR_ARITY = 4
