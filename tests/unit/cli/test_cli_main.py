"""Tests for the clipgraph command-line interface."""

import json

import pytest
import yaml

from clipgraph.cli.main import build_arg_parser, main
from clipgraph.core.animation.export import graph_to_dict, read_graph, write_graph
from clipgraph.core.animation.synthesizer import synthesize


class TestArgParser:
    """Test argument parsing."""

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_arg_parser().parse_args([])

    def test_sources_are_exclusive(self):
        with pytest.raises(SystemExit):
            build_arg_parser().parse_args(["synthesize", "--clips", "a", "--manifest", "b"])

    def test_synthesize_defaults(self):
        args = build_arg_parser().parse_args(["synthesize", "--clips", "a"])
        assert args.out is None
        assert args.blend_duration is None
        assert args.log_level is None


class TestScan:
    def test_lists_clips(self, clip_dir, capsys):
        assert main(["scan", str(clip_dir)]) == 0
        out = capsys.readouterr().out

        assert "Found 4 clips" in out
        assert "Shoot_01" in out

    def test_extension_filter(self, clip_dir, capsys):
        assert main(["scan", str(clip_dir), "--ext", "bvh"]) == 0
        assert "Found 1 clips" in capsys.readouterr().out

    def test_missing_directory(self, tmp_path, capsys):
        assert main(["scan", str(tmp_path / "missing")]) == 1
        assert "ERROR" in capsys.readouterr().out


class TestSynthesize:
    def test_from_clip_directory(self, clip_dir, tmp_path):
        out = tmp_path / "graph.json"

        assert main(["synthesize", "--clips", str(clip_dir), "--out", str(out)]) == 0

        graph = read_graph(out)
        assert graph.initial == "Idle_A"
        assert len(graph.states) == 4

    def test_from_character_directory(self, clip_dir, tmp_path):
        out = tmp_path / "graph.yaml"

        assert main(["synthesize", "--character", str(clip_dir.parent), "--out", str(out)]) == 0
        assert read_graph(out).initial == "Idle_A"

    def test_from_manifest_with_blend_override(self, tmp_path):
        manifest = tmp_path / "clips.json"
        manifest.write_text(
            json.dumps(
                {
                    "clips": [
                        {"identifier": "Idle", "source_path": "idle.fbx"},
                        {"identifier": "Walk", "source_path": "walk.fbx"},
                    ]
                }
            ),
            encoding="utf-8",
        )
        out = tmp_path / "graph.json"

        code = main(
            [
                "synthesize",
                "--manifest",
                str(manifest),
                "--out",
                str(out),
                "--blend-duration",
                "0.5",
            ]
        )

        assert code == 0
        assert {t.blend_duration for t in read_graph(out).transitions} == {0.5}

    def test_config_supplies_source_and_format(self, clip_dir, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        config = tmp_path / "clipgraph.yaml"
        config.write_text(
            f"catalog:\n  clip_dir: {clip_dir.as_posix()}\n"
            "export:\n  format: yaml\n"
            "transitions:\n  blend_duration: 0.1\n",
            encoding="utf-8",
        )

        assert main(["synthesize"]) == 0

        graph = read_graph(tmp_path / "animation_graph.yaml")
        assert {t.blend_duration for t in graph.transitions} == {0.1}

    def test_no_source(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        assert main(["synthesize"]) == 1
        assert "No clip source" in capsys.readouterr().out

    def test_empty_catalog_fails(self, tmp_path, capsys):
        empty = tmp_path / "empty"
        empty.mkdir()

        assert main(["synthesize", "--clips", str(empty), "--out", str(tmp_path / "g.json")]) == 1
        assert "Synthesis failed" in capsys.readouterr().out
        assert not (tmp_path / "g.json").exists()

    def test_character_without_clip_folder(self, tmp_path):
        assert main(["synthesize", "--character", str(tmp_path)]) == 1

    def test_format_matching_out_extension(self, clip_dir, tmp_path):
        out = tmp_path / "graph.yml"
        args = ["synthesize", "--clips", str(clip_dir), "--out", str(out), "--format", "yaml"]

        assert main(args) == 0
        assert out.read_text(encoding="utf-8").startswith("format_version: 1")

    def test_format_conflicting_with_out_extension(self, clip_dir, tmp_path, capsys):
        out = tmp_path / "graph.json"

        code = main(["synthesize", "--clips", str(clip_dir), "--out", str(out), "--format", "yaml"])

        assert code == 1
        assert "conflicts" in capsys.readouterr().out
        assert not out.exists()

    def test_format_applies_to_out_without_extension(self, clip_dir, tmp_path):
        out = tmp_path / "graph"
        args = ["synthesize", "--clips", str(clip_dir), "--out", str(out), "--format", "yaml"]

        assert main(args) == 0
        assert yaml.safe_load(out.read_text(encoding="utf-8"))["graph"]["initial"] == "Idle_A"

    def test_config_format_applies_to_out_without_extension(self, clip_dir, tmp_path):
        out = tmp_path / "graph"

        assert main(["synthesize", "--clips", str(clip_dir), "--out", str(out)]) == 0
        assert json.loads(out.read_text(encoding="utf-8"))["graph"]["initial"] == "Idle_A"


class TestInspect:
    def test_consistent_graph(self, full_catalog, tmp_path, capsys):
        path = write_graph(synthesize(full_catalog).graph, tmp_path / "graph.json")

        assert main(["inspect", str(path)]) == 0
        out = capsys.readouterr().out
        assert "Graph is consistent" in out
        assert "No death state" in out

    def test_inconsistent_graph(self, full_catalog, tmp_path, capsys):
        graph = synthesize(full_catalog).graph.model_copy(update={"initial": "Ghost"})
        path = write_graph(graph, tmp_path / "graph.json")

        assert main(["inspect", str(path)]) == 1
        assert "inconsistent" in capsys.readouterr().out

    def test_bracketed_state_ids_print_literally(self, make_catalog, tmp_path, capsys):
        """Test ids that look like rich markup are shown, not interpreted."""
        document = graph_to_dict(synthesize(make_catalog("Idle", "Walk")).graph)
        text = json.dumps(document).replace('"Idle"', '"Idle[/x]"')
        path = tmp_path / "graph.json"
        path.write_text(text, encoding="utf-8")

        assert main(["inspect", str(path)]) == 0
        assert "Initial state: Idle[/x]" in capsys.readouterr().out

    def test_missing_file(self, tmp_path):
        assert main(["inspect", str(tmp_path / "nope.json")]) == 1
