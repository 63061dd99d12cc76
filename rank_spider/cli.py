# === FILE: rank_spider/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска паука RankSpider через командную строку.

Команды:
  crawl     Обойти сайт, построить граф ссылок и вывести его
  config    Показать итоговую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (по умолчанию configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования

Опции обхода (перекрывают значения из конфига):
  --url, -u URL       Стартовый URL
  --safe/--no-safe    Соблюдать (или не соблюдать) robots.txt и META robots
  --dir, -d DIR       Сохранять проиндексированные страницы в DIR
  --count, -n INT     Индексировать не более INT страниц
  --slow/--no-slow    Пауза перед загрузкой каждой страницы
  --json PATH         Сохранить граф в JSON-файл (только для crawl)

Дополнительно:
  --version, -v       Показать версию RankSpider

Пример:
  rank-spider crawl --url http://example.com/ --safe --dir pages --count 50
"""
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from rank_spider import __version__
from rank_spider.config import SpiderConfig, load_config
from rank_spider.engine import run_crawl
from rank_spider.logger import init_logging
from rank_spider.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def crawl_options(func):
    """Опции обхода, общие для команд crawl и config."""
    options = [
        click.option('--url', '-u', 'start_url', default=None, help='Стартовый URL обхода'),
        click.option('--safe/--no-safe', 'obey_robots', default=None,
                     help='Соблюдать robots.txt и META robots'),
        click.option('--dir', '-d', 'output_dir', default=None,
                     type=click.Path(file_okay=False, path_type=Path),
                     help='Каталог для сохранения проиндексированных страниц'),
        click.option('--count', '-n', 'max_count', type=click.IntRange(min=0), default=None,
                     help='Макс. число индексируемых страниц'),
        click.option('--slow/--no-slow', 'slow', default=None,
                     help='Пауза перед загрузкой каждой страницы'),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='RankSpider, version %(version)s')
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
    """Группа команд RankSpider CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path


def _load(ctx, **overrides) -> SpiderConfig:
    try:
        return load_config(ctx.obj['config_path'], **overrides)
    except (ValidationError, OSError, ValueError, TypeError) as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@crawl_options
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить граф ссылок в JSON-файл'
)
@click.pass_context
def crawl(ctx, json_output, **overrides):
    """Обойти сайт и вывести структуру графа ссылок."""
    cfg = _load(ctx, **overrides)
    try:
        graph = run_crawl(cfg)
    except Exception as e:
        print_error(f'Ошибка при обходе: {e}')

    if json_output:
        try:
            saved_json = render_json(graph, json_output)
            click.echo(f'JSON report: {saved_json}')
        except OSError as e:
            print_error(f'Ошибка при сохранении JSON: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@crawl_options
@click.pass_context
def show_config(ctx, **overrides):
    """Показать итоговую конфигурацию в JSON."""
    cfg = _load(ctx, **overrides)
    click.echo(cfg.model_dump_json(indent=2))


def main():
    cli()


if __name__ == "__main__":
    main()
