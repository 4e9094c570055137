"""Plugin options — parsing and YAML loading.

Options arrive as one merged mapping per invocation (camelCase keys, the
way build tools pass plugin options). List options extend the built-in
defaults; they never replace them. Malformed and unknown entries are
returned for reporting and otherwise ignored.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml

from ..constants import REACT_CLASS_COMPONENT_EXTENDS

logger = logging.getLogger(__name__)

OPTION_CLASS_COMPONENT_EXTENDS_OBJECT = "classComponentExtendsObject"
OPTION_CLASS_COMPONENT_EXTENDS = "classComponentExtends"
OPTION_LOG_IGNORED_BINDING = "logIgnoredBinding"
OPTION_LOG_IGNORED_CLASS_COMPONENT_EXTENDS = "logIgnoredClassComponentExtends"


@dataclass
class PluginOptions:
    """Resolved options for one program unit."""

    class_component_extends: List[str] = field(default_factory=lambda: list(REACT_CLASS_COMPONENT_EXTENDS))
    class_component_extends_object: List[str] = field(default_factory=list)
    log_ignored_binding: bool = True
    log_ignored_class_component_extends: bool = True


def _is_name_list(value: Any) -> bool:
    return isinstance(value, (list, tuple, set, frozenset)) and all(isinstance(item, str) for item in value)


def parse_options(raw: Optional[Mapping[str, Any]]) -> Tuple[PluginOptions, List[Dict[str, Any]]]:
    """Resolve raw plugin options.

    Args:
        raw: Merged options mapping (None means no options)

    Returns:
        (options, ignored) where ignored lists one mapping per malformed
        option, followed by one mapping holding all unknown keys
    """
    options = PluginOptions()
    ignored: List[Dict[str, Any]] = []
    raw = dict(raw or {})

    extends_object = raw.pop(OPTION_CLASS_COMPONENT_EXTENDS_OBJECT, None)
    if extends_object is not None:
        if _is_name_list(extends_object):
            options.class_component_extends_object.extend(extends_object)
        else:
            ignored.append({OPTION_CLASS_COMPONENT_EXTENDS_OBJECT: extends_object})

    extends = raw.pop(OPTION_CLASS_COMPONENT_EXTENDS, None)
    if extends is not None:
        if _is_name_list(extends):
            options.class_component_extends.extend(extends)
        else:
            ignored.append({OPTION_CLASS_COMPONENT_EXTENDS: extends})

    log_binding = raw.pop(OPTION_LOG_IGNORED_BINDING, None)
    if log_binding is not None:
        options.log_ignored_binding = bool(log_binding)

    log_class = raw.pop(OPTION_LOG_IGNORED_CLASS_COMPONENT_EXTENDS, None)
    if log_class is not None:
        options.log_ignored_class_component_extends = bool(log_class)

    if raw:
        ignored.append(raw)

    return options, ignored


def load_options_file(path: str | Path) -> Dict[str, Any]:
    """Load plugin options from a YAML file.

    A missing, unreadable or non-mapping file yields no options.
    """
    config_path = Path(path)
    if not config_path.exists():
        logger.warning(f"Options file not found at {config_path}, using defaults")
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Failed to load options from {config_path}: {e}")
        return {}

    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Options file {config_path} does not hold a mapping, using defaults")
        return {}
    return data
