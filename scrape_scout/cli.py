#!/usr/bin/env python3
"""
Точка входа для запуска ScrapeScout через командную строку.

Команды:
  scan      Загрузить страницы (или обойти сайт) и вывести/сохранить отчёт
  config    Показать итоговую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: ./scrape_scout.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stderr, если не указан)
  --log-format FORMAT Формат логирования
  --verbose / --quiet DEBUG / ERROR

Команда scan опции:
  URLS...             Один или несколько URL (или --url-file)
  --format, -f        json | csv | text
  --output, -o        Сохранить отчёт в файл (с --output-per-page: префикс имён)
  --crawl             Следовать по ссылкам от первого URL
  --max-depth, --max-pages, --allow-domains, --block-domains, --cross-domain
  --delay, -d         Пауза между запросами (мс)
  --timeout, -t       Таймаут запроса (с)
  --user-agent, -u / --proxy, -p
  --selector, -s      CSS-селектор (можно несколько раз)
  --metadata          Извлекать meta / Open Graph

Дополнительно:
  --version, -v       Показать версию ScrapeScout

Пример:
  scrape-scout scan https://example.com --crawl --max-depth 1 --format text
"""
import sys
import asyncio
from pathlib import Path

import click
from pydantic import ValidationError

from scrape_scout import __version__
from scrape_scout.config import load_config, read_config_file
from scrape_scout.errors import InvalidSelectorError, InvalidUrlError
from scrape_scout.logger import DEFAULT_FORMAT, init_logging, logger
from scrape_scout.report import render, write_report
from scrape_scout.scanner import start_scan
from scrape_scout.utils import read_url_file, validate_seed_url

CONTEXT_SETTINGS = dict(help_option_names=["--help"])

def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)

@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='ScrapeScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
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
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Строка формата для логов'
)
@click.option('--verbose', is_flag=True, help='Подробные логи (DEBUG)')
@click.option('--quiet', '-q', is_flag=True, help='Только ошибки (ERROR), без вывода отчёта в stdout')
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format, verbose, quiet):
    """Группа команд ScrapeScout CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format,
        verbose=verbose,
        quiet=quiet,
    )
    try:
        read_config_file(config_path)
    except (OSError, ValueError, TypeError) as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path
    ctx.obj['quiet'] = quiet

@cli.command('scan', context_settings=CONTEXT_SETTINGS)
@click.argument('urls', nargs=-1)
@click.option('--url-file', 'url_file', default=None,
              type=click.Path(dir_okay=False, path_type=Path),
              help='Файл со списком URL (по одному на строку, строки с # пропускаются)')
@click.option('--format', '-f', 'output_format', default=None,
              type=click.Choice(['json', 'csv', 'text', 'txt'], case_sensitive=False),
              help='Формат вывода  [default: json]')
@click.option('--output', '-o', 'output', default=None,
              help='Сохранить отчёт в файл')
@click.option('--output-per-page', 'per_page', is_flag=True,
              help='Отдельный файл на каждую страницу (--output задаёт префикс)')
@click.option('--timeout', '-t', type=float, default=None, help='Таймаут запроса, с  [default: 30]')
@click.option('--user-agent', '-u', 'user_agent', default=None, help='Заголовок User-Agent')
@click.option('--proxy', '-p', default=None, help='Прокси, например http://proxy.example.com:8080')
@click.option('--selector', '-s', 'selectors', multiple=True, help='CSS-селектор (повторяемый)')
@click.option('--delay', '-d', 'delay_ms', type=int, default=None,
              help='Пауза между запросами, мс  [default: 1000]')
@click.option('--crawl', is_flag=True, default=None, help='Следовать по ссылкам')
@click.option('--max-depth', 'max_depth', type=int, default=None, help='Макс. глубина  [default: 2]')
@click.option('--max-pages', 'max_pages', type=int, default=None, help='Макс. число страниц  [default: 10]')
@click.option('--allow-domains', 'allow_domains', default=None,
              help='Разрешённые домены через запятую')
@click.option('--block-domains', 'block_domains', default=None,
              help='Запрещённые домены через запятую')
@click.option('--cross-domain', 'cross_domain', is_flag=True, default=None,
              help='Переходить на любые домены')
@click.option('--metadata', is_flag=True, default=None, help='Извлекать meta / Open Graph')
@click.pass_context
def scan(ctx, urls, url_file, output, per_page, **overrides):
    """Загрузить страницы и сгенерировать отчёт."""
    if per_page and not output:
        raise click.UsageError('--output-per-page requires --output to be specified as a filename prefix')

    if not overrides['selectors']:
        overrides['selectors'] = None
    try:
        cfg = load_config(ctx.obj['config_path'], **overrides)
    except ValidationError as e:
        print_error(f'Ошибка конфигурации: {e}')

    seeds = list(urls)
    if url_file is not None:
        try:
            seeds.extend(read_url_file(url_file))
        except (OSError, ValueError) as e:
            print_error(str(e))
    if not seeds:
        print_error('No URLs provided. Use positional arguments or --url-file to specify URLs.')

    try:
        for url in seeds:
            validate_seed_url(url)
    except InvalidUrlError as e:
        print_error(str(e))

    logger.info('Scraping %d URL(s)', len(seeds))
    try:
        pages = asyncio.run(start_scan(cfg, seeds))
    except (InvalidUrlError, InvalidSelectorError) as e:
        print_error(str(e))

    try:
        if output:
            for path in write_report(pages, cfg.output_format, output, per_page=per_page):
                click.echo(f'Report: {path}', err=True)
        elif not ctx.obj['quiet']:
            click.echo(render(pages, cfg.output_format))
    except (OSError, ValueError) as e:
        print_error(f'Ошибка при сохранении отчёта: {e}')

    logger.info('Scraped %d page(s) successfully', len(pages))

@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать итоговую конфигурацию в JSON."""
    try:
        cfg = load_config(ctx.obj['config_path'])
    except ValidationError as e:
        print_error(f'Ошибка конфигурации: {e}')
    click.echo(cfg.model_dump_json(indent=2))

if __name__ == "__main__":
    cli()
