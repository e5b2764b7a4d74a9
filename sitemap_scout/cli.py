#!/usr/bin/env python3
"""
Точка входа для запуска SitemapScout через командную строку.

Команды:
  scan      Обойти sitemap и вывести/сохранить SEO-записи
  config    Показать текущую конфигурацию

Общие опции:
  --config PATH        Путь к YAML/JSON-конфигу (default: configs/default.yaml)
  --url URL            URL корневого sitemap (override sitemap_url)
  --concurrency INT    Макс. число одновременных запросов (override concurrency)
  --log-level LEVEL    Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH      Файл для логов (stderr, если не указан)
  --log-format FORMAT  Формат логирования (e.g. "%(asctime)s %(levelname)s %(message)s")

Команда scan опции:
  --json PATH           Сохранить JSON-отчёт в файл
  --html PATH           Сохранить HTML-отчёт в файл
  --template DIR        Папка с Jinja2-шаблонами (по умолчанию шаблоны пакета)
  --pretty              Преформатировать JSON-вывод (отступ 2)
  --phase-timeout SEC   Таймаут каждой фазы обхода (секунд)

Дополнительно:
  --version, -v        Показать версию SitemapScout

Пример:
  sitemap-scout --url https://example.com/sitemap.xml --concurrency 5 scan --json report.json
"""
import asyncio
import json
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from sitemap_scout import __version__
from sitemap_scout.config import ScraperConfig, load_config
from sitemap_scout.engine import run_scan
from sitemap_scout.logger import init_logging
from sitemap_scout.report.html_report import render_html
from sitemap_scout.report.json_report import render_json
from sitemap_scout.utils import is_valid_url

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _build_config(config_path, url, concurrency) -> ScraperConfig:
    overrides = {}
    if url is not None:
        overrides['sitemap_url'] = url
    if concurrency is not None:
        overrides['concurrency'] = concurrency

    # без файла конфига достаточно --url
    if config_path is None and url is not None:
        return ScraperConfig(**overrides)

    cfg = load_config(config_path)
    if overrides:
        cfg = ScraperConfig(**{**cfg.model_dump(mode="json"), **overrides})
    return cfg


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SitemapScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON (default: configs/default.yaml).'
)
@click.option(
    '--url', '-u', 'url',
    default=None,
    help='URL корневого sitemap (override sitemap_url)'
)
@click.option(
    '--concurrency', '-n', 'concurrency',
    type=click.IntRange(min=1),
    default=None,
    help='Макс. число одновременных запросов (override concurrency)'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stderr, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(name)s %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, url, concurrency, log_level, log_file, log_format):
    """Группа команд SitemapScout CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    if url is not None and not is_valid_url(url):
        print_error(f'Некорректный URL sitemap: {url}')
    try:
        cfg = _build_config(config_path, url, concurrency)
    except (OSError, ValueError, TypeError, ValidationError) as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('scan', context_settings=CONTEXT_SETTINGS)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить HTML-отчёт в файл'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Папка с Jinja2-шаблонами (по умолчанию шаблоны пакета)'
)
@click.option(
    '--pretty', is_flag=True,
    help='Преформатировать JSON-вывод (отступ 2)'
)
@click.option(
    '--phase-timeout', 'phase_timeout',
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help='Таймаут каждой фазы обхода (секунд)'
)
@click.pass_context
def scan(ctx, json_output, html_output, template_dir, pretty, phase_timeout):
    """Обойти sitemap и сгенерировать отчёты."""
    cfg = ctx.obj['config']
    if phase_timeout is not None:
        cfg = cfg.model_copy(update={'phase_timeout': phase_timeout})
    click.echo(f'Starting crawl of sitemap: {cfg.sitemap_url}', err=True)
    try:
        report = asyncio.run(run_scan(cfg))
    except Exception as e:
        print_error(f'Ошибка при обходе: {e}')

    # Если не сохраняем в файл, печатаем записи в stdout
    if not json_output and not html_output:
        indent = 2 if pretty else None
        records = [r.to_dict() for r in report.records]
        click.echo(json.dumps(records, ensure_ascii=False, indent=indent))
        return

    if json_output:
        try:
            saved_json = render_json(report, json_output, pretty=pretty)
            click.echo(f'JSON report: {saved_json}')
        except OSError as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if html_output:
        try:
            saved_html = render_html(report, template_dir, html_output)
            click.echo(f'HTML report: {saved_html}')
        except Exception as e:
            print_error(f'Ошибка при сохранении HTML: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
