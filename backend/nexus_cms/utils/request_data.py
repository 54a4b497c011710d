import re
from typing import Any, Dict

from flask import request

_BRACKETS = re.compile(r"\[([^\]]*)\]")

# Form values a multipart client sends to mean "clear this field"
NULL_MARKERS = {"", "null"}


def _split_key(key: str):
    head = key.split("[", 1)[0]
    return [head] + _BRACKETS.findall(key[len(head):])


def _assign(tree: Dict[str, Any], parts, value) -> None:
    if len(parts) > 1 and parts[-1] == "":
        # tags[] style: every submitted value is kept
        parts = parts[:-1]
    elif isinstance(value, list):
        value = value[0]

    node = tree
    for part in parts[:-1]:
        child = node.get(part)
        if not isinstance(child, dict):
            child = {}
            node[part] = child
        node = child
    node[parts[-1]] = value


def _listify(node):
    """Convert dicts keyed ``"0", "1", ...`` into ordered lists."""
    if isinstance(node, dict):
        node = {k: _listify(v) for k, v in node.items()}
        if node and all(k.isdigit() for k in node):
            return [node[k] for k in sorted(node, key=int)]
        return node
    if isinstance(node, list):
        return [_listify(v) for v in node]
    return node


def unflatten(*multi_dicts) -> Dict[str, Any]:
    """
    Fold flat multipart keys such as ``sections[0][content]`` into nested data.

    Several sources (form fields, then files) are folded into the same tree
    so an upload lands next to the text fields of the same list item.
    """
    tree: Dict[str, Any] = {}
    for multi_dict in multi_dicts:
        for key in multi_dict.keys():
            _assign(tree, _split_key(key), multi_dict.getlist(key))
    return _listify(tree)


def request_payload() -> Dict[str, Any]:
    """Single view of the request body regardless of encoding."""
    if request.is_json:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}

    return unflatten(request.form, request.files)


def is_null(value) -> bool:
    return value is None or (isinstance(value, str) and value.strip().lower() in NULL_MARKERS)
