#!/usr/bin/env python3
"""
Точка входа SiteSearch через командную строку.

Команды:
  crawl     Обойти сайт от seed_url и сохранить страницы в pages_dir
  index     Построить индекс слов по сохранённым страницам
  query     Выполнить запросы к индексу (аргументы или построчно из stdin)
  config    Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования

Команда crawl опции:
  --depth N           Переопределить max_depth
  --json PATH         Сохранить JSON-отчёт в файл
  --html PATH         Сохранить HTML-отчёт в файл
  --template DIR      Папка с Jinja2-шаблонами
  --pretty            Преформатировать JSON-вывод (отступ 2)
  --crawl-timeout SEC Таймаут всего обхода (секунд)

Пример:
  site-search --config configs/default.yaml crawl --depth 2 --json reports/crawl.json
  site-search index
  site-search query -- "linux and kernel or -windows shell"
"""
import asyncio
import sys
from pathlib import Path

import click

from site_search import __version__
from site_search.config import load_config
from site_search.engine import start_crawl
from site_search.indexer import build_index, load_index, save_index
from site_search.logger import init_logging
from site_search.query import QuerySyntaxError, search
from site_search.report.html_report import render_html
from site_search.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteSearch, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default='configs/default.yaml',
    show_default=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML или JSON.'
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
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд SiteSearch CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.option(
    '--depth', '-d', 'depth',
    type=click.IntRange(min=0),
    default=None,
    help='Макс. глубина обхода (override max_depth)'
)
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
    help='Папка с Jinja2-шаблонами (по умолчанию встроенный шаблон)'
)
@click.option(
    '--pretty', is_flag=True,
    help='Преформатировать JSON-вывод (отступ 2)'
)
@click.option(
    '--crawl-timeout', 'crawl_timeout',
    type=float,
    default=None,
    help='Таймаут всего обхода (секунд)'
)
@click.pass_context
def crawl(ctx, depth, json_output, html_output, template_dir, pretty, crawl_timeout):
    """Обойти сайт и сохранить страницы."""
    cfg = ctx.obj['config']
    if depth is not None:
        cfg = cfg.with_overrides(max_depth=depth)
    click.echo(f'Starting crawl: {cfg.seed} (depth {cfg.max_depth})', err=True)
    try:
        if crawl_timeout:
            report = asyncio.run(
                asyncio.wait_for(start_crawl(cfg), timeout=crawl_timeout)
            )
        else:
            report = asyncio.run(start_crawl(cfg))
    except asyncio.TimeoutError:
        print_error(f'Обход не завершён за {crawl_timeout} секунд')
    except Exception as e:
        print_error(f'Ошибка при обходе: {e}')

    if not json_output and not html_output:
        click.echo(report.json(pretty=pretty))
        return

    if json_output:
        try:
            saved_json = render_json(report, json_output, pretty=pretty)
            click.echo(f'JSON report: {saved_json}')
        except Exception as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if html_output:
        try:
            saved_html = render_html(report, template_dir, html_output)
            click.echo(f'HTML report: {saved_html}')
        except Exception as e:
            print_error(f'Ошибка при сохранении HTML: {e}')


@cli.command('index', context_settings=CONTEXT_SETTINGS)
@click.option(
    '--output', '-o', 'output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Куда сохранить индекс (override index_file)'
)
@click.pass_context
def index(ctx, output):
    """Построить индекс по сохранённым страницам."""
    cfg = ctx.obj['config']
    target = output or cfg.index_file
    try:
        idx = build_index(cfg.pages_dir)
        saved = save_index(idx, target)
    except (OSError, ValueError) as e:
        print_error(f'Ошибка при построении индекса: {e}')
    click.echo(f'Index: {saved} ({len(idx)} words)')


def _answer(line: str, idx) -> None:
    try:
        ranks = search(line, idx)
    except QuerySyntaxError as e:
        click.echo(f'invalid query ({e})')
        return
    click.echo('---- Search results -------')
    if not ranks:
        click.echo('no results found :(')
        return
    for r in ranks:
        click.echo(f'url: {r.url}, rank: {r.score}')


@cli.command('query', context_settings=CONTEXT_SETTINGS)
@click.argument('words', nargs=-1)
@click.option(
    '--index', '-i', 'index_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Файл индекса (override index_file)'
)
@click.pass_context
def query(ctx, words, index_path):
    """Искать по индексу: WORDS как один запрос, иначе построчно из stdin.

    Запросы с отрицанием передавайте после "--": query -- linux -windows
    """
    cfg = ctx.obj['config']
    try:
        idx = load_index(index_path or cfg.index_file)
    except (OSError, ValueError) as e:
        print_error(f'Ошибка загрузки индекса: {e}')
    click.echo(f'Successfully loaded index; number of unique words {len(idx)}', err=True)

    if words:
        _answer(' '.join(words), idx)
        return

    for line in click.get_text_stream('stdin'):
        line = line.strip()
        if line:
            _answer(line, idx)


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
