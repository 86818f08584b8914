#!/usr/bin/env python3
"""
Точка входа SiteHarvest для командной строки.

Команды:
  crawl     Обойти сайт от стартового URL в пределах лимита времени
  scrape    Собрать типизированные записи (news, ecommerce, weather)
  serve     Запустить HTTP API
  config    Показать настройки из файла конфигурации

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования

Недостающие URL и лимит времени запрашиваются интерактивно.

Пример:
  site-harvest crawl https://example.com --time-limit 60 --output-dir out
  site-harvest scrape --type news https://example.com/news --time-limit 30 --limit 10
"""
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Dict

import click
import uvicorn

from site_harvest import __version__
from site_harvest.api import create_app
from site_harvest.config import CrawlConfig, ScrapeConfig, build_config, read_config_file
from site_harvest.engine import save_crawl, save_scrape, start_crawl, start_scrape
from site_harvest.errors import BrowserLaunchError, InvalidInput
from site_harvest.logger import init_logging
from site_harvest.report.html_report import render_html
from site_harvest.typed import WebsiteType

CONTEXT_SETTINGS = dict(help_option_names=["--help"])
DEFAULT_LIMIT = 100


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _default_settings() -> Dict[str, Any]:
    try:
        return read_config_file(None)
    except FileNotFoundError:
        return {}


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteHarvest, version %(version)s')
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
    """Группа команд SiteHarvest CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        settings = read_config_file(config_path) if config_path else _default_settings()
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['settings'] = settings
    ctx.obj['log_level'] = log_level


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('url', required=False)
@click.option(
    '--time-limit', '-t', 'time_limit',
    type=click.IntRange(min=1),
    default=None,
    help='Лимит времени на весь обход (секунд)'
)
@click.option(
    '--fetcher', 'fetcher',
    type=click.Choice(['browser', 'http']),
    default=None,
    help='Загрузчик страниц: browser (chromium) или http (без JS)'
)
@click.option(
    '--output-dir', '-o', 'output_dir',
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help='Каталог для JSON-файлов'
)
@click.option(
    '--filter-all', is_flag=True,
    help='Фильтровать все страницы, а не только первую'
)
@click.option(
    '--html', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить HTML-сводку в файл'
)
@click.option(
    '--headful', is_flag=True,
    help='Показывать окно браузера'
)
@click.pass_context
def crawl(ctx, url, time_limit, fetcher, output_dir, filter_all, html_output, headful):
    """Обойти сайт и сохранить найденные страницы."""
    settings = ctx.obj['settings']
    if url is None and 'seed_url' not in settings:
        url = click.prompt('Please enter the URL to scrape')
    if time_limit is None and 'time_limit' not in settings:
        time_limit = click.prompt('Please enter the time limit in seconds', type=click.IntRange(min=1))

    try:
        cfg = build_config(
            CrawlConfig,
            settings,
            seed_url=url,
            time_limit=time_limit,
            fetcher=fetcher,
            output_dir=output_dir,
            filter_all=filter_all or None,
            headless=False if headful else None,
        )
    except InvalidInput as e:
        print_error(f'Неверные параметры: {e}')

    click.echo(f'Starting to scrape: {cfg.seed_url} with a time limit of {cfg.time_limit} seconds')
    try:
        report = asyncio.run(start_crawl(cfg))
    except BrowserLaunchError as e:
        print_error(f'Не удалось запустить браузер: {e}')
    except Exception as e:
        print_error(f'Ошибка при обходе: {e}')

    try:
        outputs = save_crawl(report, cfg)
    except OSError as e:
        print_error(f'Ошибка при сохранении JSON: {e}')
    click.echo(f'Scraping completed successfully! Data saved as {outputs.raw}')
    if outputs.filtered is not None:
        click.echo(f'Filtered data saved as {outputs.filtered}')

    if html_output:
        try:
            saved_html = render_html(report, html_output)
            click.echo(f'HTML report: {saved_html}')
        except Exception as e:
            print_error(f'Ошибка при сохранении HTML: {e}')


@cli.command('scrape', context_settings=CONTEXT_SETTINGS)
@click.argument('url', required=False)
@click.option(
    '--type', '-T', 'website_type',
    type=click.Choice(WebsiteType.choices(), case_sensitive=False),
    default=None,
    help='Тип сайта'
)
@click.option(
    '--time-limit', '-t', 'time_limit',
    type=click.IntRange(min=1),
    default=None,
    help='Таймаут загрузки стартовой страницы (секунд)'
)
@click.option(
    '--limit', '-l', 'limit',
    type=click.IntRange(min=1),
    default=None,
    help=f'Сколько ссылок обработать [{DEFAULT_LIMIT}]'
)
@click.option(
    '--offset', 'offset',
    type=click.IntRange(min=0),
    default=None,
    help='Сколько ссылок пропустить [0]'
)
@click.option(
    '--fetcher', 'fetcher',
    type=click.Choice(['browser', 'http']),
    default=None,
    help='Загрузчик страниц: browser (chromium) или http (без JS)'
)
@click.option(
    '--output-dir', '-o', 'output_dir',
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help='Каталог для JSON-файла'
)
@click.pass_context
def scrape(ctx, url, website_type, time_limit, limit, offset, fetcher, output_dir):
    """Собрать записи новостного, торгового или погодного сайта."""
    settings = ctx.obj['settings']
    if website_type is None and 'website_type' not in settings:
        website_type = click.prompt(
            f'Enter website type ({", ".join(WebsiteType.choices())})',
            type=click.Choice(WebsiteType.choices(), case_sensitive=False),
        )
    if url is None and 'url' not in settings:
        url = click.prompt('Enter URL to scrape')
    if time_limit is None and 'time_limit' not in settings:
        time_limit = click.prompt('Enter time limit in seconds', type=click.IntRange(min=1))

    try:
        cfg = build_config(
            ScrapeConfig,
            settings,
            url=url,
            website_type=website_type,
            time_limit=time_limit,
            limit=limit,
            offset=offset,
            fetcher=fetcher,
            output_dir=output_dir,
        )
    except InvalidInput as e:
        print_error(f'Неверные параметры: {e}')

    try:
        result = asyncio.run(start_scrape(cfg))
    except BrowserLaunchError as e:
        print_error(f'Не удалось запустить браузер: {e}')
    except Exception as e:
        print_error(f'Ошибка при парсинге: {e}')

    try:
        saved = save_scrape(result, cfg)
    except OSError as e:
        print_error(f'Ошибка при сохранении JSON: {e}')
    click.echo(f'Data saved to {saved}')


@cli.command('serve', context_settings=CONTEXT_SETTINGS)
@click.option('--host', default='127.0.0.1', show_default=True, help='Адрес для прослушивания')
@click.option('--port', default=3000, show_default=True, type=int, help='Порт')
@click.pass_context
def serve(ctx, host, port):
    """Запустить HTTP API."""
    app = create_app(ctx.obj['settings'])
    click.echo(f'Scraper API running at http://{host}:{port}')
    uvicorn.run(app, host=host, port=port, log_level=ctx.obj['log_level'].lower())


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать настройки из файла конфигурации в JSON."""
    click.echo(json.dumps(ctx.obj['settings'], indent=2, ensure_ascii=False, default=str))


if __name__ == "__main__":
    cli()
