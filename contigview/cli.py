#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Command-line interface for ContigView.

This module provides the main CLI entry point and all subcommands for
drawing components of a layout database headlessly: summarizing the
assembly, drawing a standard or SPQR component, searching it, finishing
paths through it, and exporting the result as element JSON.
"""

import logging
import sys
from contextlib import contextmanager
import click
from pathlib import Path
import yaml

from .version import __version__
from .config.parser import ConfigParser, ConfigValidationError
from .config.schema import save_config_template, validate_config
from .errors import ContigViewError
from .kinds import Colorization


def _setup_logging(verbose, quiet, level_name='INFO'):
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = getattr(logging, str(level_name).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%H:%M:%S',
    )
    logging.getLogger('contigview').setLevel(level)


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.option('--quiet', '-q', is_flag=True, help='Suppress non-error output')
@click.pass_context
def main(ctx, verbose, quiet):
    """
    ContigView: Headless Assembly Graph Viewer

    Converts a precomputed assembly graph layout database into a drawn element
    graph, with collapsible node groups, SPQR tree views, edge filtering and
    manual path finishing.
    """
    # Ensure context object exists
    ctx.ensure_object(dict)
    ctx.obj['VERBOSE'] = verbose
    ctx.obj['QUIET'] = quiet


# ============================================================================
# Configuration Management Commands
# ============================================================================

@main.group()
def config():
    """Configuration management commands."""
    pass


@config.command('init')
@click.option('--output', '-o', type=click.Path(), default='contigview_config.yaml',
              help='Output configuration file path')
@click.option('--template', '-t',
              type=click.Choice(['default', 'explicit', 'straight']),
              default='default', help='Configuration template type')
def config_init(output, template):
    """Generate a template configuration file with all available parameters."""
    click.echo(f"Generating {template} configuration template: {output}")

    try:
        save_config_template(Path(output), template=template)
        click.echo(f"✓ Configuration file created: {output}")
        click.echo("\nThe configuration file includes:")
        click.echo("  • Drawing settings (rotation, chunking, curve epsilon)")
        click.echo("  • Edge thickness, filtering and straightening")
        click.echo("  • Node colorization colors")
        click.echo("  • SPQR view mode")
        click.echo("\nEdit this file to customize how components are drawn.")
    except OSError as e:
        click.echo(f"✗ Error creating configuration: {e}", err=True)
        sys.exit(1)


@config.command('validate')
@click.argument('config_file', type=click.Path(exists=True))
def config_validate(config_file):
    """Validate a configuration file."""
    click.echo(f"Validating configuration file: {config_file}")

    try:
        config = ConfigParser(config_file).to_dict()
        errors = validate_config(config)

        if errors:
            click.echo("\n✗ Configuration validation failed:")
            for error in errors:
                click.echo(f"  • {error}", err=True)
            sys.exit(1)
        else:
            click.echo("✓ Configuration is valid")

            # Show key settings
            drawing = config['drawing']
            click.echo("\nKey Settings:")
            click.echo(f"  Rotation: {drawing['rotation']['current']}°")
            click.echo(f"  SPQR mode: {config['spqr']['mode']}")
            click.echo(f"  Edge thickness: {config['edges']['min_thickness']}"
                       f"-{config['edges']['max_thickness']}")
    except ConfigValidationError as e:
        click.echo(f"✗ Error validating configuration: {e}", err=True)
        sys.exit(1)


@config.command('show')
@click.argument('config_file', type=click.Path(exists=True))
def config_show(config_file):
    """Display the merged configuration, with environment references resolved."""
    try:
        config = ConfigParser(config_file).to_dict()
        click.echo(yaml.dump(config, default_flow_style=False, sort_keys=False))
    except ConfigValidationError as e:
        click.echo(f"✗ Error reading configuration: {e}", err=True)
        sys.exit(1)


# ============================================================================
# Database Commands
# ============================================================================

@main.command()
@click.argument('database', type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def info(ctx, database):
    """Show assembly-wide information from a layout database."""
    from .io_utils.layout_db import LayoutDatabase

    _setup_logging(ctx.obj['VERBOSE'], ctx.obj['QUIET'])
    try:
        with LayoutDatabase(database) as db:
            summary = db.assembly_summary()
    except ContigViewError as e:
        click.echo(f"✗ Error: {e}", err=True)
        sys.exit(1)

    units = summary.length_units
    click.echo(f"Assembly: {summary.filename} ({summary.filetype})")
    click.echo("=" * 60)
    click.echo(f"  Nodes: {summary.node_count:,}")
    click.echo(f"  Edges: {summary.edge_count:,}")
    click.echo(f"  Total length: {summary.total_length:,} {units}")
    click.echo(f"  N50: {summary.n50:,} {units}")
    click.echo(f"  Connected components: {summary.component_count:,}")
    click.echo(f"  Single components: {summary.single_component_count:,}")
    click.echo(f"  Biconnected components: {summary.bicomponent_count:,}")
    if summary.gc_percent is not None:
        click.echo(f"  GC content: {summary.gc_percent}")


@contextmanager
def _drawn_component(ctx, database, rank, spqr, config_file, overrides):
    """Load settings and draw a component; the database stays open inside the block."""
    from .drawing.scheduler import IncrementalDrawScheduler
    from .io_utils.layout_db import LayoutDatabase

    parser = ConfigParser(config_file)
    parser.merge_cli_overrides(overrides)
    settings = parser.draw_settings()
    _setup_logging(ctx.obj['VERBOSE'], ctx.obj['QUIET'],
                   parser.get('output.logging.level', 'INFO'))

    with LayoutDatabase(database) as db:
        scheduler = IncrementalDrawScheduler(db, settings)
        if spqr:
            draw = scheduler.draw_spqr_component(rank, spqr)
            label = f"Drawing {spqr} SPQR component #{rank}"
        else:
            draw = scheduler.draw_component(rank)
            label = f"Drawing component #{rank}"

        if ctx.obj['QUIET']:
            scheduler.run(draw)
        else:
            with click.progressbar(length=100, label=label) as bar:
                def update(progress):
                    bar.update(int(progress.fraction * 100) - bar.pos)
                scheduler.run(draw, update)
        yield scheduler, parser


@main.command()
@click.argument('database', type=click.Path(exists=True, dir_okay=False))
@click.option('--rank', '-r', type=int, default=1, show_default=True,
              help='Size rank of the component to draw')
@click.option('--spqr', type=click.Choice(['implicit', 'explicit']), default=None,
              help='Draw the SPQR view of the component in this mode')
@click.option('--collapse-all', is_flag=True, help='Collapse every node group after drawing')
@click.option('--min-edge-weight', type=int, default=None,
              help='Hide edges with a lower multiplicity')
@click.option('--straight', is_flag=True, help='Draw every edge as a straight line')
@click.option('--rotation', type=click.Choice(['0', '90', '180', '270']), default=None,
              help='View rotation in degrees')
@click.option('--colorization', type=click.Choice([c.value for c in Colorization]),
              default=None, help='Node colorization')
@click.option('--histogram', is_flag=True, help='Print the edge weight histogram')
@click.option('--output', '-o', type=click.Path(), default=None,
              help='Write the drawn elements to this JSON file')
@click.option('--include-removed', is_flag=True,
              help='Also export hidden elements')
@click.option('--config', '-c', 'config_file', type=click.Path(exists=True), default=None,
              help='Configuration file')
@click.pass_context
def draw(ctx, database, rank, spqr, collapse_all, min_edge_weight, straight, rotation,
         colorization, histogram, output, include_removed, config_file):
    """Draw a component of a layout database."""
    from .io_utils.export import export_elements_json
    from .utils.edge_weights import edge_weight_histogram

    overrides = {
        'spqr.mode': spqr,
        'edges.min_weight': min_edge_weight,
        'edges.straight': True if straight else None,
        'drawing.rotation.current': int(rotation) if rotation is not None else None,
        'output.include_removed': True if include_removed else None,
    }
    try:
        drawn = _drawn_component(ctx, database, rank, spqr, config_file, overrides)
        with drawn as (scheduler, parser):
            session = scheduler.session

            min_weight = parser.get('edges.min_weight')
            if min_weight is not None:
                scheduler.engine.cull_edges(min_weight)
            if parser.get('edges.straight'):
                scheduler.engine.reduce_edges_to_straight_lines()
            if collapse_all and not spqr:
                scheduler.engine.collapse_all()
            if colorization is not None:
                scheduler.renderer.change_node_colorization(Colorization(colorization))

            graph = session.graph
            click.echo(f"✓ Drew component #{rank}: {graph.node_count()} nodes, "
                       f"{graph.edge_count()} edges visible")
            if session.clusters:
                click.echo(f"  Clusters: {len(session.clusters)} "
                           f"({len(session.collapsed)} collapsed)")
            if session.removed_edges:
                click.echo(f"  Edges hidden by weight: {len(session.removed_edges)}")

            if histogram:
                hist = edge_weight_histogram(session.edge_weights,
                                             scheduler.settings.histogram_bins)
                click.echo("\nEdge weight histogram:")
                for count, low, high in zip(hist.counts, hist.edges, hist.edges[1:]):
                    click.echo(f"  [{low:.2f}, {high:.2f}): {count}")

            if output:
                export_elements_json(session, output,
                                     include_removed=parser.get('output.include_removed', False))
                click.echo(f"✓ Elements written to: {output}")
    except (ContigViewError, ConfigValidationError) as e:
        click.echo(f"✗ Error: {e}", err=True)
        sys.exit(1)


@main.command()
@click.argument('database', type=click.Path(exists=True, dir_okay=False))
@click.argument('names')
@click.option('--rank', '-r', type=int, default=1, show_default=True,
              help='Size rank of the component to search')
@click.option('--collapse-all', is_flag=True, help='Collapse every node group first')
@click.pass_context
def search(ctx, database, names, rank, collapse_all):
    """Find comma separated element ids/labels in a drawn component."""
    from .search import search_for_elements

    ctx.obj['QUIET'] = True
    try:
        with _drawn_component(ctx, database, rank, None, None, {}) as (scheduler, _):
            if collapse_all:
                scheduler.engine.collapse_all()
            found = search_for_elements(scheduler.session, names)
    except (ContigViewError, ValueError) as e:
        click.echo(f"✗ Error: {e}", err=True)
        sys.exit(1)

    for element_id in found:
        click.echo(element_id)


@main.command()
@click.argument('database', type=click.Path(exists=True, dir_okay=False))
@click.argument('node_ids', nargs=-1, required=True)
@click.option('--rank', '-r', type=int, default=1, show_default=True,
              help='Size rank of the component')
@click.option('--format', '-f', 'file_format', type=click.Choice(['csv', 'agp']),
              default='csv', help='Path export format')
@click.option('--output', '-o', type=click.Path(), default=None,
              help='Write the path to this file instead of stdout')
@click.pass_context
def path(ctx, database, node_ids, rank, file_format, output):
    """Finish a path by picking NODE_IDS in order (autofinishing between them)."""
    from .finishing import FinishingSession
    from .io_utils.export import export_path_file

    ctx.obj['QUIET'] = True
    try:
        with _drawn_component(ctx, database, rank, None, None, {}) as (scheduler, _):
            finishing = FinishingSession(scheduler.session)
            finishing.start()
            for node_id in node_ids:
                if not finishing.active:
                    click.echo(f"✗ Path already ended before {node_id}", err=True)
                    sys.exit(1)
                if not finishing.add_node(node_id):
                    click.echo(f"✗ {node_id} can't be added to the path", err=True)
                    sys.exit(1)
            if finishing.active:
                finishing.end()
    except ContigViewError as e:
        click.echo(f"✗ Error: {e}", err=True)
        sys.exit(1)

    if output:
        export_path_file(finishing, output, file_format)
        click.echo(f"✓ Path written to: {output}")
    else:
        click.echo(finishing.export_path(file_format).rstrip("\n"))


if __name__ == '__main__':
    sys.exit(main())
