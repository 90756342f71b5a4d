"""gocoveralls CLI - convert Go coverage profiles and upload them."""

from __future__ import annotations

from pathlib import Path

import click

from gocoveralls import __version__
from gocoveralls.cli.utils import build_overrides, find_repo_root
from gocoveralls.config import GoverallsConfig, load_config
from gocoveralls.core.errors import GoverallsError
from gocoveralls.core.logging import bind_job_id, clear_job_id, configure_logging, get_logger
from gocoveralls.core.progress import (
    get_console,
    make_coverage_table,
    pluralize,
    spinner,
    status,
)
from gocoveralls.coverage import (
    Profile,
    SourceResolver,
    build_source_files,
    build_summary,
    build_text_summary,
    merge_profiles,
    parse_profiles,
    read_profiles,
    split_patterns,
)
from gocoveralls.git import collect_git_info
from gocoveralls.testrun import run_go_test
from gocoveralls.upload import CoverallsClient, Job, build_job

log = get_logger("cli")


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="gocoveralls")
@click.argument("packages", nargs=-1)
@click.option(
    "--coverprofile",
    help="Comma-separated coverage profiles to use instead of running go test.",
)
@click.option("--package", "package", help="Go package to test.")
@click.option("--repotoken", envvar="COVERALLS_TOKEN", help="Repository token.")
@click.option("--service", help="CI service or environment the tests ran in.")
@click.option("--endpoint", help="Jobs API endpoint.")
@click.option("--jobid", help="Job id reported to the service (default: random).")
@click.option("--parallel", is_flag=True, help="Job is one of several parallel jobs.")
@click.option("--flagname", help="Label of this job within a parallel build.")
@click.option("--ignore", help="Comma-separated glob patterns of files to leave out.")
@click.option("--strict", is_flag=True, help="Fail when a source file can't be read.")
@click.option("--no-upload-source", is_flag=True, help="Send source digests only.")
@click.option(
    "--covermode",
    type=click.Choice(["set", "count", "atomic"]),
    help="Coverage mode passed to go test.",
)
@click.option("--race", is_flag=True, help="Pass -race to go test.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Config file (default: .gocoveralls.yaml in the repository root).",
)
@click.option("--show", is_flag=True, help="Print a per-file coverage table.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def cli(
    packages: tuple[str, ...],
    coverprofile: str | None,
    package: str | None,
    repotoken: str | None,
    service: str | None,
    endpoint: str | None,
    jobid: str | None,
    parallel: bool,
    flagname: str | None,
    ignore: str | None,
    strict: bool,
    no_upload_source: bool,
    covermode: str | None,
    race: bool,
    config_path: Path | None,
    show: bool,
    verbose: bool,
) -> None:
    """Convert Go coverage profiles and upload them to a coverage service.

    PACKAGES are passed to go test when no --coverprofile is given. Without a
    repository token the job payload is printed to stdout instead.
    """
    configure_logging(level="DEBUG" if verbose else "WARNING")
    root = find_repo_root()

    overrides = build_overrides(
        logging={"level": "DEBUG" if verbose else None},
        service={
            "repo_token": repotoken,
            "service_name": service,
            "endpoint": endpoint,
            "service_job_id": jobid,
            "parallel": True if parallel else None,
            "flag_name": flagname,
            "upload_source": False if no_upload_source else None,
        },
        sources={
            "strict": True if strict else None,
            "ignore": split_patterns(ignore) or None,
        },
        testrun={
            "cover_mode": covermode,
            "race": True if race else None,
            "verbose": True if verbose else None,
        },
    )

    try:
        config = load_config(root, config_path=config_path, **overrides)
        configure_logging(config=config.logging)
        _run(config, root, [*packages, *([package] if package else [])], coverprofile, show)
    except GoverallsError as e:
        log.error("run_failed", **e.to_dict())
        raise click.ClickException(e.message) from e
    finally:
        clear_job_id()


def _load_profiles(
    config: GoverallsConfig,
    root: Path,
    packages: list[str],
    coverprofile: str | None,
) -> list[Profile]:
    if coverprofile:
        runs = [read_profiles(Path(p)) for p in split_patterns(coverprofile)]
    else:
        with spinner("Running go test"):
            runs = [parse_profiles(run_go_test(packages, config=config.testrun, cwd=root))]
    return merge_profiles(runs)


def _run(
    config: GoverallsConfig,
    root: Path,
    packages: list[str],
    coverprofile: str | None,
    show: bool,
) -> None:
    profiles = _load_profiles(config, root, packages, coverprofile)

    resolver = SourceResolver(root, gopath=config.sources.gopath or None)
    source_files = build_source_files(
        profiles,
        resolver,
        strict=config.sources.strict,
        ignore=config.sources.ignore,
    )

    job = build_job(source_files, config=config.service, git=collect_git_info(root))
    bind_job_id(job.service_job_id)
    _report(config, job, show)


def _report(config: GoverallsConfig, job: Job, show: bool) -> None:
    if show:
        summary = build_summary(job.source_files, max_missed_lines=0)
        get_console().print(make_coverage_table(summary.get("files", [])))
        status(build_text_summary(job.source_files))

    if not job.repo_token:
        click.echo(job.to_json())
        return

    client = CoverallsClient(config.service.endpoint, timeout_sec=config.service.timeout_sec)
    with spinner(f"Uploading {pluralize(len(job.source_files), 'file')}"):
        response = client.submit(job)

    click.echo(response.message)
    click.echo(response.url)


if __name__ == "__main__":
    cli()
