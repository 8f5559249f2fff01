# utils/xml_loader.py
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, Dict, Union

# Child groups flattened as "<group>_<field>"
PERSON_GROUPS = ("primary", "spouse")


def parse_setup_xml(file_path: Union[str, Path]) -> Dict[str, Any]:
    tree = ET.parse(file_path)
    root = tree.getroot()

    setup_dict: Dict[str, Any] = {}

    for child in root:
        if child.tag in PERSON_GROUPS:
            for sub in child:
                val = try_cast(sub.text)
                if sub.tag == "sex" and isinstance(val, str):
                    val = val.lower()
                setup_dict[f"{child.tag}_{sub.tag}"] = val
        else:
            val = try_cast(child.text)
            # Normalize enum-like values
            if child.tag in ["filing", "conversion_window"] and isinstance(val, str):
                val = val.lower()
            if child.tag == "state" and isinstance(val, str):
                val = val.upper()
            setup_dict[child.tag] = val

    return setup_dict


def try_cast(value: str) -> Any:
    """Try to convert string to int or float if possible, else leave as str."""
    if value is None:
        return None
    value = value.strip()
    if value == "":
        return None
    # Booleans
    if value.lower() in ("true", "false"):
        return value.lower() == "true"

    # Integers (try first)
    try:
        if '.' not in value:
            return int(value)
    except ValueError:
        pass

    # Floats (try second)
    try:
        return float(value)
    except ValueError:
        pass

    return value  # Return as string if all else fails


CONFIG_DIR = Path(__file__).parent.parent / "config"

DEFAULT_SETUP = parse_setup_xml(CONFIG_DIR / "default_setup.xml")
