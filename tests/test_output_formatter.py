"""Tests for descriptor rendering."""

from __future__ import annotations

from pathlib import Path

import pytest

from flashmap.output_formatter import format_flashmap, format_section_tree
from flashmap.parser import parse_flashmap
from flashmap.schemas import Section


class TestFormatFlashmap:
    """Tests for format_flashmap function."""

    def test_matches_normalized_file(self, chromeos: Section, data_dir: Path) -> None:
        """The parsed layout renders in canonical form."""
        want = (data_dir / "chromeos_normalized.fmd").read_text(encoding="utf-8")
        assert format_flashmap(chromeos) == want

    def test_round_trip(self, chromeos: Section) -> None:
        """Rendered text parses back into an equal tree."""
        assert parse_flashmap(format_flashmap(chromeos)) == chromeos

    def test_normalized_form_is_stable(self, data_dir: Path) -> None:
        """Rendering canonical text reproduces it exactly."""
        text = (data_dir / "chromeos_normalized.fmd").read_text(encoding="utf-8")
        assert format_flashmap(parse_flashmap(text)) == text

    @pytest.mark.parametrize(
        ("section", "expected"),
        [
            (Section(name="A", size=0x1000), "A 0x1000\n"),
            (Section(name="A", size=4, unit="k"), "A 4k\n"),
            (Section(name="A", size=2, unit="M", start=0x200000), "A@0x200000 2M\n"),
            (Section(name="A", size=0, annotation=""), "A() 0x0\n"),
            (Section(name="A", size=16, annotation="CBFS PRESERVE", start=255), "A(CBFS PRESERVE)@0xff 0x10\n"),
        ],
    )
    def test_leaf_lines(self, section: Section, expected: str) -> None:
        """Leaves render on one line with hex offsets and sizes."""
        assert format_flashmap(section) == expected

    def test_container_layout(self) -> None:
        """Containers open a block and close it on its own line."""
        flash = parse_flashmap("ROOT 0x20 { A@0 0x10 { B 0x10 } C 16 }")
        assert format_flashmap(flash) == (
            "ROOT 0x20 {\n"
            "\tA@0x0 0x10 {\n"
            "\t\tB 0x10\n"
            "\t}\n"
            "\tC 0x10\n"
            "}\n"
        )

    def test_custom_prefix_and_level(self) -> None:
        """Indentation unit and starting level are configurable."""
        flash = parse_flashmap("ROOT 0x10 { A 0x10 }")
        assert format_flashmap(flash, prefix="  ", level=1) == "  ROOT 0x10 {\n    A 0x10\n  }\n"

    def test_empty_block_renders_as_leaf(self) -> None:
        """A container without children is rendered as a leaf."""
        assert format_flashmap(parse_flashmap("ROOT 0x10 {}")) == "ROOT 0x10\n"


class TestFormatSectionTree:
    """Tests for format_section_tree function."""

    def test_implicit_offsets(self) -> None:
        """Implicit starts follow the running sum of sibling sizes."""
        flash = parse_flashmap("R 0x30 { A 0x10 B 0x20 }")
        assert format_section_tree(flash) == (
            "R [0x00000000, 0x00000030) 48 B (implicit)\n"
            "    A [0x00000000, 0x00000010) 16 B (implicit)\n"
            "    B [0x00000010, 0x00000030) 32 B (implicit)"
        )

    def test_absolute_addresses(self, chromeos: Section) -> None:
        """Explicit starts are relative to the parent's absolute base."""
        lines = format_section_tree(chromeos).splitlines()
        assert lines[0] == "FLASH [0xff000000, 0x100000000) 16 MiB"
        assert "        SI_ME [0xff001000, 0xff200000) 2044 KiB" in lines
        assert any(line.strip().startswith("COREBOOT [0xffbf8000, 0x100000000)") for line in lines)


class TestIndentation:
    """Tests for indentation of the canonical form."""

    def test_canonical_indent_ignores_configuration(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """The default indentation is a tab whatever FLASHMAP_INDENT says."""
        monkeypatch.setattr("flashmap.config.FLASHMAP_INDENT", "  ")
        flash = parse_flashmap("ROOT 0x10 { A 0x10 }")
        assert format_flashmap(flash) == "ROOT 0x10 {\n\tA 0x10\n}\n"

    def test_deep_tree_renders(self) -> None:
        """Rendering does not recurse once per nesting level."""
        depth = 3000
        source = "".join(f"S{i} 1 {{ " for i in range(depth)) + "LEAF 1" + " }" * depth
        flash = parse_flashmap(source)

        text = format_flashmap(flash, prefix="")

        assert text.startswith("S0 0x1 {\nS1 0x1 {\n")
        assert text.endswith("LEAF 0x1\n" + "}\n" * depth)
        assert format_flashmap(parse_flashmap(text), prefix="") == text
        assert len(format_section_tree(flash).splitlines()) == depth + 1
