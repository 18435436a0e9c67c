"""
Configuration merger for Skilo.

Deep merge of layered config dictionaries, with +key/-key list operations.
"""

from typing import Any


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Deep merge two dictionaries with list operation support.

    Merge rules:
    - Scalars and plain lists in override replace base
    - Dicts merge recursively
    - A '+key' list appends its unique items to base['key']
    - A '-key' list removes its items from base['key']
    - A None value removes the key

    Args:
        base: Base configuration dictionary.
        override: Override configuration dictionary.

    Returns:
        Merged configuration dictionary.

    Examples:
        >>> deep_merge({"ignore": ["target"]}, {"+ignore": ["node_modules"]})
        {'ignore': ['target', 'node_modules']}

        >>> deep_merge({"ignore": ["target", "dist"]}, {"-ignore": ["dist"]})
        {'ignore': ['target']}
    """
    result = base.copy()

    for key, value in override.items():
        if key.startswith("+") and isinstance(value, list):
            actual_key = key[1:]
            existing = result.get(actual_key)
            if isinstance(existing, list):
                result[actual_key] = existing + [item for item in value if item not in existing]
            else:
                result[actual_key] = value

        elif key.startswith("-") and isinstance(value, list):
            actual_key = key[1:]
            existing = result.get(actual_key)
            if isinstance(existing, list):
                result[actual_key] = [item for item in existing if item not in value]

        elif value is None:
            result.pop(key, None)

        elif isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = deep_merge(result[key], value)

        else:
            result[key] = value

    return result


def get_nested_value(config: dict[str, Any], key_path: str) -> Any:
    """
    Get a nested value from a configuration dictionary.

    Args:
        config: Configuration dictionary.
        key_path: Dot-separated key path (e.g., "lint.rules.body_length").

    Returns:
        The value at the key path, or None if not found.
    """
    current: Any = config

    for key in key_path.split("."):
        if isinstance(current, dict) and key in current:
            current = current[key]
        else:
            return None

    return current


def set_nested_value(config: dict[str, Any], key_path: list[str], value: Any) -> dict[str, Any]:
    """
    Set a nested value, creating intermediate dictionaries as needed.

    Args:
        config: Configuration dictionary (modified in place).
        key_path: Key segments, outermost first.
        value: Value to set.

    Returns:
        The modified configuration dictionary.
    """
    current = config

    for key in key_path[:-1]:
        if not isinstance(current.get(key), dict):
            current[key] = {}
        current = current[key]

    current[key_path[-1]] = value
    return config
