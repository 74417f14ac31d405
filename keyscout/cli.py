# === FILE: keyscout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска KeyScout через командную строку.

Команды:
  run       Обойти домены, найти ключевые слова, сохранить CSV и отчёты
  config    Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования

Команда run опции:
  --domains PATH      Файл со списком доменов (override domains_file)
  --keywords PATH     JSON-файл с ключевыми словами (override keywords_file)
  --depth INT         Максимальная глубина обхода (override max_crawl_depth)
  --quota INT         Сколько ключевых слов искать на домене (override max_keywords_per_domain)
  --json PATH         Сохранить JSON-отчёт в файл
  --html PATH         Сохранить HTML-отчёт в файл
  --template DIR      Папка с Jinja2-шаблонами
  --pretty            Преформатировать JSON-вывод (отступ 2)
  --run-timeout SEC   Таймаут всего запуска (секунд)

Пример:
  keyscout --config configs/default.yaml run --json report.json --quota 2
"""
import asyncio
import sys
from pathlib import Path

import click

from keyscout import __version__
from keyscout.config import load_config
from keyscout.logger import DEFAULT_FORMAT, init_logging
from keyscout.orchestrator import start_scout
from keyscout.report.html_report import render_html
from keyscout.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='KeyScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации (default: configs/default.yaml).'
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
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд KeyScout CLI."""
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


@cli.command('run', context_settings=CONTEXT_SETTINGS)
@click.option(
    '--domains', '-d', 'domains_file',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Файл со списком доменов'
)
@click.option(
    '--keywords', '-k', 'keywords_file',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='JSON-файл с ключевыми словами'
)
@click.option('--depth', type=click.IntRange(min=1), default=None, help='Максимальная глубина обхода')
@click.option('--quota', type=click.IntRange(min=1), default=None, help='Ключевых слов на домен')
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
    help='Папка с Jinja2-шаблонами (по умолчанию — встроенный шаблон)'
)
@click.option(
    '--pretty', is_flag=True,
    help='Преформатировать JSON (stdout и --json файл, отступ 2)'
)
@click.option(
    '--run-timeout', 'run_timeout',
    type=float,
    default=None,
    help='Таймаут всего запуска (секунд)'
)
@click.pass_context
def run(ctx, domains_file, keywords_file, depth, quota, json_output, html_output,
        template_dir, pretty, run_timeout):
    """Обойти домены и записать найденные ключевые слова."""
    overrides = {
        'domains_file': domains_file,
        'keywords_file': keywords_file,
        'max_crawl_depth': depth,
        'max_keywords_per_domain': quota,
    }
    cfg = ctx.obj['config'].model_copy(
        update={k: v for k, v in overrides.items() if v is not None}
    )
    click.echo(f'Starting run with domains from: {cfg.domains_file}')
    try:
        if run_timeout:
            report = asyncio.run(
                asyncio.wait_for(start_scout(cfg), timeout=run_timeout)
            )
        else:
            report = asyncio.run(start_scout(cfg))
    except asyncio.TimeoutError:
        print_error(f'Запуск не завершён за {run_timeout} секунд')
    except Exception as e:
        print_error(f'Ошибка при обходе: {e}')

    # Если не сохраняем в файл — печатаем в stdout
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


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
