"""Tests for result formatters."""

import json

import pytest

from treesift.cli.formatters import format_results, format_text
from treesift.models import (
    ComponentResult,
    ComponentType,
    ExportType,
    HookUsage,
    PropInfo,
    StylingLibrary,
    StylingLibraryType,
)


@pytest.fixture
def sample_document():
    """Create a sample result document."""
    result = ComponentResult(
        file_path="components/Button.tsx",
        name="Button",
        type=ComponentType.ARROW_FUNCTION,
        export_type=ExportType.DEFAULT,
        description="Primary action button.",
        props=[PropInfo(name="label"), PropInfo(name="size", default_value="'md'")],
        hooks=[HookUsage(name="useState", arguments=["..."])],
        components=["button", "Icon"],
        styling_library=StylingLibrary(
            type=StylingLibraryType.TAILWIND_LIKE,
            confidence=40,
            indicators=["Uses Tailwind-like class: px-4"],
        ),
    )
    return result.to_dict()


def test_format_json_single(sample_document):
    """A single document is rendered on its own."""
    output = format_results({"Button.tsx": sample_document}, "json")

    data = json.loads(output)
    assert data["name"] == "Button"
    assert data["stylingLibrary"]["confidence"] == 40


def test_format_json_multiple(sample_document):
    """Several documents are keyed by path."""
    other = ComponentResult(file_path="Card.tsx", name="Card").to_dict()

    output = format_results({"Button.tsx": sample_document, "Card.tsx": other}, "json")

    data = json.loads(output)
    assert list(data) == ["Button.tsx", "Card.tsx"]
    assert data["Card.tsx"]["name"] == "Card"


def test_format_json_indent(sample_document):
    """Test JSON indentation."""
    output = format_results({"Button.tsx": sample_document}, "json", indent=4)
    assert '\n    "name": "Button"' in output


def test_format_text(sample_document):
    """Test the text summary."""
    output = format_text(sample_document)
    lines = output.splitlines()

    assert lines[0] == "components/Button.tsx"
    assert lines[1] == "  Component: Button (ArrowFunctionExpression, default export)"
    assert "  Description: Primary action button." in lines
    assert "  Props (2):" in lines
    assert "    - size = 'md'" in lines
    assert "    - useState(...)" in lines
    assert "  Styling: tailwindLike (confidence 40)" in lines
    assert "    - Uses Tailwind-like class: px-4" in lines
    assert lines[-1] == "  Elements: button, Icon"


def test_format_text_minimal():
    """An empty result still renders name and styling."""
    document = ComponentResult(file_path="empty.tsx", errors=["HookCollector: boom"]).to_dict()

    output = format_text(document)

    assert output.splitlines() == [
        "empty.tsx",
        "  Component: Unknown (Unknown, named export)",
        "  Styling: unknown (confidence 0)",
        "  Error: HookCollector: boom",
    ]


def test_format_results_text_joins_documents(sample_document):
    """Documents are separated by a blank line."""
    other = ComponentResult(file_path="Card.tsx", name="Card").to_dict()

    output = format_results({"a": sample_document, "b": other}, "text")

    assert "\n\nCard.tsx\n" in output


def test_invalid_format(sample_document):
    """Test invalid format type raises error."""
    with pytest.raises(ValueError, match="Unknown format type"):
        format_results({"Button.tsx": sample_document}, "xml")
