#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ContigView v0.1.0

Tests for CLI command interface.

Author: ContigView Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import json

import pytest
from click.testing import CliRunner
from contigview.cli import main
from contigview.io_utils.layout_db import LayoutDatabase


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def db_arg(layout_db_path):
    return str(layout_db_path)


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_cli_help(self, runner):
        """Test that --help runs without error."""
        result = runner.invoke(main, ['--help'])

        assert result.exit_code == 0
        assert 'ContigView' in result.output

    def test_cli_version(self, runner):
        """Test that --version displays version."""
        result = runner.invoke(main, ['--version'])

        assert result.exit_code == 0
        assert '0.1.0' in result.output

    def test_invalid_command(self, runner):
        """Test that invalid commands are handled gracefully."""
        result = runner.invoke(main, ['nonexistent_command'])

        # Should fail but not crash
        assert result.exit_code != 0


class TestConfigCommands:
    """Test config subcommands."""

    def test_config_init_and_validate(self, runner):
        """Test generating and validating a template."""
        with runner.isolated_filesystem():
            result = runner.invoke(main, ['config', 'init', '--output', 'test_config.yaml',
                                          '--template', 'explicit'])
            assert result.exit_code == 0
            assert 'Configuration file created' in result.output

            result = runner.invoke(main, ['config', 'validate', 'test_config.yaml'])
            assert result.exit_code == 0
            assert 'Configuration is valid' in result.output
            assert 'SPQR mode: explicit' in result.output

    def test_config_validate_invalid(self, runner):
        """Test that invalid settings fail validation."""
        with runner.isolated_filesystem():
            with open('bad.yaml', 'w') as f:
                f.write("drawing:\n  rotation:\n    current: 45\n")
            result = runner.invoke(main, ['config', 'validate', 'bad.yaml'])
            assert result.exit_code == 1
            assert 'validation failed' in result.output

    def test_config_show(self, runner):
        """Test printing the merged configuration."""
        with runner.isolated_filesystem():
            with open('user.yaml', 'w') as f:
                f.write("spqr:\n  mode: explicit\n")
            result = runner.invoke(main, ['config', 'show', 'user.yaml'])
            assert result.exit_code == 0
            assert 'mode: explicit' in result.output
            assert 'inches_to_pixels: 54' in result.output

    def test_config_show_resolves_env_vars(self, runner, monkeypatch):
        """Test that environment references are resolved before display."""
        monkeypatch.setenv('CONTIGVIEW_MODE', 'explicit')
        with runner.isolated_filesystem():
            with open('env.yaml', 'w') as f:
                f.write("spqr:\n  mode: ${CONTIGVIEW_MODE}\n")
            result = runner.invoke(main, ['config', 'show', 'env.yaml'])
            assert result.exit_code == 0
            assert 'mode: explicit' in result.output


class TestInfo:
    """Test the info command."""

    def test_info(self, runner, db_arg):
        """Test the assembly summary output."""
        result = runner.invoke(main, ['info', db_arg])

        assert result.exit_code == 0
        assert 'Nodes: 6' in result.output
        assert 'Total length: 500 nt' in result.output
        assert 'GC content: 45.67%' in result.output


class TestDraw:
    """Test the draw command."""

    def test_draw_collapsed_to_json(self, runner, db_arg, tmp_path):
        """Test drawing, collapsing and exporting."""
        output = tmp_path / "out.json"
        result = runner.invoke(main, ['-q', 'draw', db_arg, '-o', str(output),
                                      '--collapse-all'])

        assert result.exit_code == 0
        assert '✓ Drew component #1: 5 nodes, 5 edges visible' in result.output
        assert 'Clusters: 1 (1 collapsed)' in result.output
        with open(output) as f:
            payload = json.load(f)
        assert payload['collapsed_clusters'] == ['C1']

    def test_draw_spqr(self, runner, db_arg):
        """Test drawing the implicit SPQR view."""
        result = runner.invoke(main, ['-q', 'draw', db_arg, '--spqr', 'implicit'])

        assert result.exit_code == 0
        assert '7 nodes, 4 edges visible' in result.output

    def test_draw_edge_filter_and_histogram(self, runner, db_arg):
        """Test hiding light edges and printing the histogram."""
        result = runner.invoke(main, ['-q', 'draw', db_arg, '--min-edge-weight', '4',
                                      '--histogram'])

        assert result.exit_code == 0
        assert 'Edges hidden by weight: 3' in result.output
        assert 'Edge weight histogram:' in result.output

    def test_draw_missing_component(self, runner, db_arg):
        """Test that unknown component ranks are reported."""
        result = runner.invoke(main, ['-q', 'draw', db_arg, '--rank', '9'])

        assert result.exit_code == 1
        assert '✗ Error' in result.output

    @pytest.mark.parametrize("command,extra", [
        ('draw', ['--rank', '9']),
        ('search', ['contig_99']),
        ('path', ['1', '5', '6']),
    ])
    def test_database_closed_on_failure(self, runner, db_arg, monkeypatch, command, extra):
        """Test that the layout database is closed when a command fails."""
        closed = []
        original_close = LayoutDatabase.close

        def tracking_close(self):
            closed.append(True)
            original_close(self)

        monkeypatch.setattr(LayoutDatabase, 'close', tracking_close)
        result = runner.invoke(main, ['-q', command, db_arg] + extra)

        assert result.exit_code == 1
        assert closed


class TestSearch:
    """Test the search command."""

    def test_search_label(self, runner, db_arg):
        """Test finding a node by its label."""
        result = runner.invoke(main, ['search', db_arg, 'contig_2'])

        assert result.exit_code == 0
        assert result.output.strip() == '2'

    def test_search_collapsed(self, runner, db_arg):
        """Test that collapsed members resolve to their cluster."""
        result = runner.invoke(main, ['search', db_arg, 'contig_2', '--collapse-all'])

        assert result.exit_code == 0
        assert result.output.strip() == 'C1'

    def test_search_unknown(self, runner, db_arg):
        """Test that unknown names fail."""
        result = runner.invoke(main, ['search', db_arg, 'contig_99'])

        assert result.exit_code == 1
        assert '✗ Error' in result.output


class TestPath:
    """Test the path command."""

    def test_path_csv(self, runner, db_arg):
        """Test autofinishing between picked nodes."""
        result = runner.invoke(main, ['path', db_arg, '1', '5'])

        assert result.exit_code == 0
        assert result.output.strip() == '1,2,3,4,5'

    def test_path_agp(self, runner, db_arg):
        """Test AGP output."""
        result = runner.invoke(main, ['path', db_arg, '1', '5', '--format', 'agp'])

        assert result.exit_code == 0
        assert len(result.output.strip().splitlines()) == 5
        assert result.output.startswith('scaffold_1\t1\t100\t1\tW\t1')

    def test_path_already_ended(self, runner, db_arg):
        """Test that picking past a dead end fails."""
        result = runner.invoke(main, ['path', db_arg, '1', '5', '6'])

        assert result.exit_code == 1
        assert 'Path already ended before 6' in result.output

    def test_path_to_file(self, runner, db_arg, tmp_path):
        """Test writing the path to a file."""
        output = tmp_path / "path.csv"
        result = runner.invoke(main, ['path', db_arg, '1', '5', '-o', str(output)])

        assert result.exit_code == 0
        assert output.read_text() == '1,2,3,4,5'

# ContigView v0.1.0
# Any usage is subject to this software's license.
