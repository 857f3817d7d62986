"""
Command-line interface for the RNG meter drop-rate simulator.
"""

import click
import logging
from dataclasses import replace

from .config import (
    DEFAULT_INPUT_PATH, DEFAULT_OUTPUT_PATH, DEFAULT_PRETTY_OUTPUT_PATH,
    DEFAULT_SIM_CONFIG, load_sim_config_from_json
)
from .data.loader import CatalogError
from .diagnostics import format_results
from .pipeline import run_pipeline


@click.command()
@click.option(
    '--input', '-i', 'input_path',
    type=click.Path(),
    default=DEFAULT_INPUT_PATH,
    help=f'Loot catalog JSON (default: {DEFAULT_INPUT_PATH})'
)
@click.option(
    '--output', '-o', 'output_path',
    type=click.Path(),
    default=DEFAULT_OUTPUT_PATH,
    help=f'Compact results JSON (default: {DEFAULT_OUTPUT_PATH})'
)
@click.option(
    '--pretty-output', 'pretty_output_path',
    type=click.Path(),
    default=DEFAULT_PRETTY_OUTPUT_PATH,
    help=f'Indented results JSON (default: {DEFAULT_PRETTY_OUTPUT_PATH})'
)
@click.option(
    '--summary-csv',
    type=click.Path(),
    help='Also write a flat CSV table (one row per loot entry)'
)
@click.option(
    '--sim-config',
    type=click.Path(exists=True),
    help='Simulation config JSON (trials, seed, run scores)'
)
@click.option(
    '--n-trials', '-n',
    type=int,
    default=None,
    help=f'Attempts per experiment (default: {DEFAULT_SIM_CONFIG.n_trials})'
)
@click.option(
    '--chunk-size',
    type=int,
    default=None,
    help=f'Uniforms drawn per batch (default: {DEFAULT_SIM_CONFIG.chunk_size})'
)
@click.option(
    '--seed',
    type=int,
    default=None,
    help='Random seed for reproducibility'
)
@click.option(
    '--workers', '-w',
    type=int,
    default=None,
    help='Worker processes (default: CPU count, 1 = no pool)'
)
@click.option(
    '--verbose/--quiet', '-v/-q',
    default=True,
    help='Verbose output'
)
def main(
    input_path,
    output_path,
    pretty_output_path,
    summary_csv,
    sim_config,
    n_trials,
    chunk_size,
    seed,
    workers,
    verbose
):
    """
    Simulate meter-boosted and reroll drop rates for every loot entry.
    """
    if verbose:
        logging.basicConfig(
            level=logging.INFO,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

    # Validate critical numeric parameters
    if n_trials is not None and n_trials <= 0:
        raise click.BadParameter("n-trials must be a positive integer", param_hint="'--n-trials'")
    if chunk_size is not None and chunk_size <= 0:
        raise click.BadParameter("chunk-size must be a positive integer", param_hint="'--chunk-size'")
    if workers is not None and workers <= 0:
        raise click.BadParameter("workers must be a positive integer", param_hint="'--workers'")

    try:
        config = load_sim_config_from_json(sim_config) if sim_config else DEFAULT_SIM_CONFIG
    except ValueError as e:
        raise click.ClickException(f"Invalid simulation config {sim_config}: {e}")

    # Explicit flags override the config file
    overrides = {}
    if n_trials is not None:
        overrides['n_trials'] = n_trials
    if chunk_size is not None:
        overrides['chunk_size'] = chunk_size
    if seed is not None:
        overrides['seed'] = seed
    if workers is not None:
        overrides['max_workers'] = workers
    if overrides:
        config = replace(config, **overrides)

    click.echo("Running simulation...")
    click.echo(f"  Catalog: {input_path}")
    click.echo(f"  Trials per experiment: {config.n_trials}")
    click.echo(f"  S run score: {config.s_run_score:g} | S+ run score: {config.s_plus_run_score:g}")
    if config.seed is not None:
        click.echo(f"  Seed: {config.seed}")
    if config.max_workers is not None:
        click.echo(f"  Workers: {config.max_workers}")

    try:
        results = run_pipeline(
            input_path=input_path,
            output_path=output_path,
            pretty_output_path=pretty_output_path,
            config=config,
            summary_csv_path=summary_csv,
        )
    except (FileNotFoundError, CatalogError) as e:
        raise click.ClickException(str(e))
    except OSError as e:
        raise click.ClickException(f"I/O error: {e}")

    if verbose:
        click.echo("\n" + format_results(results))

    click.echo(f"\nResults saved to {output_path} and {pretty_output_path}")
    if summary_csv:
        click.echo(f"Summary table saved to {summary_csv}")


if __name__ == '__main__':
    main()
