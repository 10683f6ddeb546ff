# Copyright 2024 Michael Maillet, Damien Davison, Sacha Davison
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Command Line Interface for srcapp.
"""
import click
from ..BUILDERS.app_builder import AppObjectBuilder
from ..CONVERTERS.to_manifest import FORMATS, ManifestConverter
from ..MODELS.builder_settings import BuilderSettings, LogLevel, SecretSource
from ..PARSERS.config_parser import BuilderConfigParser
from ..UTILS.labels import get_port_name
from ..errors import ConfigError
from ..logging_config import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.option('--env-file', type=click.Path(dir_okay=False), default=None,
              help='.env file with SRCAPP_* settings')
@click.option('--log-level', default=None,
              type=click.Choice([level.value for level in LogLevel], case_sensitive=False),
              help='Log level (overrides SRCAPP_LOG_LEVEL)')
@click.pass_context
def cli(ctx, env_file, log_level):
    """
    srcapp - build the API objects for a new app from source.

    Reads an app configuration and prints the image stream, build config,
    deployment config, service and route that create it.
    """
    ctx.ensure_object(dict)
    try:
        settings = BuilderSettings.from_env(env_file)
    except ValueError as e:
        click.echo(f"Error: invalid settings: {e}", err=True)
        ctx.exit(1)
    if log_level:
        settings = settings.model_copy(update={'log_level': LogLevel(log_level.upper())})
    configure_logging(settings.log_level.value)
    ctx.obj['settings'] = settings


def _load_config(ctx, file):
    try:
        return BuilderConfigParser().parse(file)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


@cli.command()
@click.option('--file', '-f', 'file', required=True, help='App configuration file')
@click.option('--out', '-o', default=None, help='Write the manifest to this file')
@click.option('--format', 'fmt', type=click.Choice(FORMATS), default='yaml')
@click.option('--strong-secrets', is_flag=True,
              help='Use the OS random source for webhook secrets')
@click.pass_context
def generate(ctx, file, out, fmt, strong_secrets):
    """Generate the app's API objects as a List manifest."""
    settings = ctx.obj['settings']
    if strong_secrets:
        settings = settings.model_copy(update={'secret_source': SecretSource.STRONG})

    config = _load_config(ctx, file)
    builder = AppObjectBuilder(secret_generator=settings.make_secret_generator())
    objects = builder.make_api_objects(config)
    logger.info("Generated %s", ", ".join(o['kind'] for o in objects))

    converter = ManifestConverter(objects)
    if out:
        converter.convert(out, fmt)
        click.echo(f"Manifest written to {out}")
    else:
        click.echo(converter.render(fmt), nl=False)


@cli.command()
@click.option('--file', '-f', 'file', required=True, help='App configuration file')
@click.pass_context
def ports(ctx, file):
    """List the ports exposed by the builder image"""
    config = _load_config(ctx, file)
    parsed = AppObjectBuilder().get_ports(config.image_stream_tag)
    if not parsed:
        click.echo("No ports exposed; no service or route will be created.")
        return
    click.echo(f"{'PORT':8} {'PROTOCOL':10} {'NAME':15}")
    click.echo("-" * 33)
    for port in parsed:
        click.echo(f"{port.container_port:<8} {port.protocol:10} {get_port_name(port):15}")


def main():
    """
    Main entry point for the CLI.
    """
    cli(obj={})


if __name__ == '__main__':
    main()
