"""Command-line interface for the statement converter."""

import json
import sys
import click
from pathlib import Path
from typing import Optional

from .comparer import compare
from .converter import convert
from .models.core import ComparisonReport, RecordFormat
from .utils.codec_factory import CodecFactory, get_codec
from .utils.config_manager import ConfigManager
from .utils.error_handler import (
    ErrorHandler,
    handle_codec_error,
    handle_file_access_error,
    handle_file_write_error,
    handle_invalid_config,
    handle_unknown_format,
)
from .utils.errors import CodecError, UnknownFormat


FORMAT_CHOICE = click.Choice(RecordFormat.names(), case_sensitive=False)


class ConverterCLI:
    """Main CLI class for the statement converter"""

    def __init__(self, config_path: Optional[str] = None, verbose: bool = False):
        """Initialize CLI with configuration"""
        self.config_manager = ConfigManager(config_path)
        self.config = self.config_manager.load_config()
        self.error_handler = ErrorHandler(
            log_directory=self.config.log_directory,
            level="DEBUG" if verbose else self.config.log_level
        )
        if self.config_manager.config_error:
            handle_invalid_config(
                self.error_handler,
                self.config_manager.config_file,
                self.config_manager.config_error
            )
        self.codec_factory = CodecFactory()

    def resolve_format(self, explicit: Optional[str], default: Optional[str],
                       file_path: Optional[str]) -> RecordFormat:
        """Pick the format from the option, the configuration or the file extension"""
        if explicit:
            return RecordFormat.parse(explicit)
        if default:
            return RecordFormat.parse(default)
        if file_path:
            detected = self.codec_factory.detect_format(file_path)
            if detected:
                return detected
        raise UnknownFormat(Path(file_path).suffix if file_path else "")

    def read_input(self, file_path: str) -> Optional[bytes]:
        """Read a whole file, recording access errors"""
        try:
            with open(file_path, 'rb') as f:
                return f.read()
        except OSError as e:
            handle_file_access_error(self.error_handler, file_path, e)
            return None

    def convert_file(self, input_path: str,
                     input_format: RecordFormat,
                     output_format: RecordFormat) -> Optional[bytes]:
        """Convert one file, returning None on failure"""
        data = self.read_input(input_path)
        if data is None:
            return None

        try:
            output = convert(data, input_format, output_format)
        except CodecError as e:
            handle_codec_error(self.error_handler, e, file_path=input_path,
                               format_name=f"{input_format.value}->{output_format.value}")
            return None

        self.error_handler.log_debug(
            f"Converted {input_path} from {input_format.value} to {output_format.value}"
        )
        return output

    def compare_files(self, file1: str, format1: RecordFormat,
                      file2: str, format2: RecordFormat) -> Optional[ComparisonReport]:
        """Decode and compare two files, returning None on failure"""
        decoded = []
        for path, fmt in ((file1, format1), (file2, format2)):
            data = self.read_input(path)
            if data is None:
                return None
            try:
                decoded.append(get_codec(fmt).decode(data))
            except CodecError as e:
                handle_codec_error(self.error_handler, e, file_path=path, format_name=fmt.value)
                return None

        return compare(decoded[0], decoded[1], self.config.list_all_differences)

    def generate_config_template(self, output_path: str) -> bool:
        """Write a configuration template"""
        try:
            self.config_manager.save_config_template(output_path)
            return True
        except OSError as e:
            handle_file_write_error(self.error_handler, output_path, e)
            return False


# CLI Commands using Click
@click.group()
@click.option('--config', '-c', help='Path to configuration file')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.pass_context
def cli(ctx, config, verbose):
    """Statement Converter - convert and compare bank statements in csv, text and binary formats"""
    ctx.ensure_object(dict)
    ctx.obj['cli'] = ConverterCLI(config, verbose)


@cli.command(name='convert')
@click.option('--input', '-i', 'input_path', required=True, help='Statement file to convert')
@click.option('--input-format', type=FORMAT_CHOICE, help='Format of the input file')
@click.option('--output-format', type=FORMAT_CHOICE, help='Format to convert to')
@click.option('--output', '-o', 'output_path', help='Write to this file instead of stdout')
@click.pass_context
def convert_command(ctx, input_path, input_format, output_format, output_path):
    """Convert a statement file to another format"""
    cli_instance = ctx.obj['cli']
    config = cli_instance.config

    try:
        source = cli_instance.resolve_format(input_format, config.default_input_format, input_path)
        target = cli_instance.resolve_format(output_format, config.default_output_format, output_path)
    except UnknownFormat as e:
        handle_unknown_format(cli_instance.error_handler, e)
        click.echo(f"✗ {e}", err=True)
        sys.exit(1)

    output = cli_instance.convert_file(input_path, source, target)
    if output is None:
        click.echo(f"✗ Conversion failed: {cli_instance.error_handler.errors[-1].message}", err=True)
        sys.exit(1)

    if output_path:
        try:
            Path(output_path).write_bytes(output)
        except OSError as e:
            handle_file_write_error(cli_instance.error_handler, output_path, e)
            click.echo(f"✗ Unable to write {output_path}: {e}", err=True)
            sys.exit(1)
        click.echo(f"✓ Converted {input_path} ({source.value}) to {output_path} ({target.value})", err=True)
    else:
        stdout = click.get_binary_stream('stdout')
        stdout.write(output)
        stdout.flush()


@cli.command(name='compare')
@click.option('--file1', required=True, help='First statement file')
@click.option('--format1', type=FORMAT_CHOICE, help='Format of the first file')
@click.option('--file2', required=True, help='Second statement file')
@click.option('--format2', type=FORMAT_CHOICE, help='Format of the second file')
@click.option('--json', 'as_json', is_flag=True, help='Print the report as JSON')
@click.pass_context
def compare_command(ctx, file1, format1, file2, format2, as_json):
    """Compare two statement files, possibly in different formats.

    Exits with 0 when the statements are equal, 1 when they differ and 2 on
    errors.
    """
    cli_instance = ctx.obj['cli']
    config = cli_instance.config

    try:
        fmt1 = cli_instance.resolve_format(format1, None, file1)
        fmt2 = cli_instance.resolve_format(format2, None, file2)
    except UnknownFormat as e:
        handle_unknown_format(cli_instance.error_handler, e)
        click.echo(f"✗ {e}", err=True)
        sys.exit(2)

    report = cli_instance.compare_files(file1, fmt1, file2, fmt2)
    if report is None:
        click.echo(f"✗ Comparison failed: {cli_instance.error_handler.errors[-1].message}", err=True)
        sys.exit(2)

    if as_json or config.report_format == 'json':
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        click.echo(report.format_text())

    sys.exit(0 if report.equal else 1)


@cli.command()
@click.argument('output_path', default='converter_config.json')
@click.option('--format', type=click.Choice(['json', 'yaml']), default='json', help='Configuration file format')
@click.pass_context
def init_config(ctx, output_path, format):
    """Generate configuration template file"""
    cli_instance = ctx.obj['cli']

    # Adjust extension based on format
    extensions = ('.yml', '.yaml') if format == 'yaml' else ('.json',)
    path = Path(output_path)
    if path.suffix.lower() not in extensions:
        output_path = str(path.with_suffix(extensions[0]))

    if cli_instance.generate_config_template(output_path):
        click.echo(f"✓ Configuration template generated: {output_path}")
    else:
        click.echo("✗ Failed to generate configuration template")
        sys.exit(1)


if __name__ == '__main__':
    cli()
