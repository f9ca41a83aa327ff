#!/usr/bin/env python3
"""
Точка входа для запуска SeoScout через командную строку.

Команды:
  crawl     Обойти сайты, проверить SEO-теги и ресурсы, сохранить отчёт об ошибках
  config    Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --limit INT         Макс. число страниц на сайт (override max_pages)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования

Команда crawl опции:
  --output-dir DIR    Каталог для JSON-отчёта (override output_dir)
  --html PATH         Дополнительно сохранить HTML-отчёт
  --stdout            Напечатать JSON-отчёт вместо записи в файл
  --pretty            Преформатировать JSON-вывод (отступ 2)
  --scan-timeout SEC  Таймаут всего запуска (секунд)

Пример:
  seo-scout crawl https://www.example.com/ --output-dir downloads --limit 200
"""
import asyncio
import sys
from pathlib import Path

import click

from seo_scout import __version__
from seo_scout.config import load_config
from seo_scout.engine import start_scan
from seo_scout.logger import DEFAULT_FORMAT, init_logging, logger
from seo_scout.report.html_report import render_html
from seo_scout.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SeoScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--limit', '-l', 'limit',
    type=click.IntRange(min=1),
    default=None,
    help='Макс. число страниц на сайт (override max_pages)'
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
    help='Путь к файлу логов (stdout, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, limit, log_level, log_file, log_format):
    """Группа команд SeoScout CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    if limit is not None:
        cfg = cfg.model_copy(update={'max_pages': limit})
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('sites', nargs=-1)
@click.option(
    '--output-dir', '-o', 'output_dir',
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help='Каталог для JSON-отчёта (override output_dir)'
)
@click.option(
    '--html', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Дополнительно сохранить HTML-отчёт'
)
@click.option(
    '--stdout', 'to_stdout', is_flag=True,
    help='Напечатать JSON-отчёт вместо записи в файл'
)
@click.option(
    '--pretty', is_flag=True,
    help='Преформатировать JSON-вывод (отступ 2)'
)
@click.option(
    '--scan-timeout', 'scan_timeout',
    type=float,
    default=None,
    help='Таймаут всего запуска (секунд)'
)
@click.pass_context
def crawl(ctx, sites, output_dir, html_output, to_stdout, pretty, scan_timeout):
    """Обойти сайты и сохранить отчёт об ошибках (только если они есть)."""
    cfg = ctx.obj['config']
    seeds = list(sites) or list(cfg.sites)
    if not seeds:
        print_error('Не заданы сайты: передайте URL аргументами или укажите sites в конфиге')

    try:
        if scan_timeout:
            report = asyncio.run(
                asyncio.wait_for(start_scan(cfg, seeds), timeout=scan_timeout)
            )
        else:
            report = asyncio.run(start_scan(cfg, seeds))
    except asyncio.TimeoutError:
        print_error(f'Обход не завершён за {scan_timeout} секунд')
    except Exception as e:
        print_error(f'Ошибка при обходе: {e}')

    if report.is_empty:
        click.echo('No errors found for any site. No report generated.')
        return

    if to_stdout:
        click.echo(report.json(pretty=pretty))
    else:
        try:
            saved_json = render_json(report, output_dir or cfg.output_dir)
            logger.info("Error report generated: %s", saved_json)
            click.echo(f'Error report generated: {saved_json}')
        except OSError as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if html_output:
        try:
            saved_html = render_html(report, None, html_output)
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
