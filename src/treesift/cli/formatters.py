"""Result formatters for CLI output.

Provides formatting for analysis results in two formats:
- JSON: Machine-readable document (one per file, or an object keyed by path)
- Text: Short human-readable summary
"""

import json
from typing import Any


def format_results(documents: dict[str, dict[str, Any]], format_type: str, indent: int = 2) -> str:
    """Format analysis documents in the specified format.

    Args:
        documents: Result documents keyed by (relative) file path
        format_type: Output format ("json" or "text")
        indent: JSON indentation

    Returns:
        Formatted string output

    Raises:
        ValueError: If format_type is not recognized
    """
    if format_type == "json":
        return _format_json(documents, indent)
    elif format_type == "text":
        return "\n\n".join(format_text(document) for document in documents.values())
    else:
        raise ValueError(f"Unknown format type: {format_type}")


def _format_json(documents: dict[str, dict[str, Any]], indent: int) -> str:
    # A single file renders as its own document
    if len(documents) == 1:
        (document,) = documents.values()
        return json.dumps(document, indent=indent)
    return json.dumps(documents, indent=indent)


def format_text(document: dict[str, Any]) -> str:
    """Render one result document as a human summary.

    Args:
        document: ComponentResult.to_dict() output

    Returns:
        Multi-line summary
    """
    lines = [
        f"{document['filePath']}",
        f"  Component: {document['name']} ({document['type']}, {document['exportType']} export)",
    ]

    if document.get("description"):
        lines.append(f"  Description: {document['description']}")

    props = document.get("props") or []
    if props:
        lines.append(f"  Props ({len(props)}):")
        for prop in props:
            default = f" = {prop['defaultValue']}" if prop.get("defaultValue") is not None else ""
            lines.append(f"    - {prop['name']}{default}")

    hooks = document.get("hooks") or []
    if hooks:
        lines.append(f"  Hooks ({len(hooks)}):")
        for hook in hooks:
            lines.append(f"    - {hook['name']}({', '.join(hook['arguments'])})")

    styling = document["stylingLibrary"]
    lines.append(f"  Styling: {styling['type']} (confidence {styling['confidence']})")
    for indicator in styling.get("indicators") or []:
        lines.append(f"    - {indicator}")

    components = document.get("components") or []
    if components:
        lines.append(f"  Elements: {', '.join(components)}")

    for error in document.get("errors") or []:
        lines.append(f"  Error: {error}")

    return "\n".join(lines)
