"""Main CLI entrypoint for certdeployer."""

import json
import logging
import sys
from typing import Any, Dict

import click
from pydantic import ValidationError

from ..config import load_defaults
from ..deployer import deploy
from ..errors import ConfigurationError
from ..events import get_status_from_events, read_events
from ..request import DeploymentRequest
from ..state import list_runs, read_request_json, run_exists


@click.group()
@click.option('--config', 'config_path', type=click.Path(dir_okay=False),
              help='YAML file with default deploy options')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.pass_context
def main(ctx, config_path, verbose):
    """certdeployer - Deploy a PKCS#12 certificate into a server keystore."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
        stream=sys.stderr,
    )
    if config_path:
        try:
            ctx.default_map = {'deploy': load_defaults(config_path)}
        except ConfigurationError as e:
            raise click.UsageError(str(e))


def _json_output(data: Dict[str, Any]) -> None:
    """Output data as JSON."""
    click.echo(json.dumps(data, indent=None))


def _fail(message: str, output_json: bool, code: int = 1) -> None:
    if output_json:
        _json_output({'error': message})
    click.echo(f"❌ {message}", err=True)
    sys.exit(code)


@main.command('deploy')
@click.option('--bucket', required=True, help='Object store bucket holding the certificate')
@click.option('--object-name', required=True, help='Certificate object name (.pfx)')
@click.option('--conf-dir', required=True, help='Server configuration directory (contains server.xml)')
@click.option('--cert-dir', required=True, help='Local directory to stage the downloaded certificate')
@click.option('--keystore-password', envvar='KEYSTORE_PASSWORD', show_envvar=True,
              help='Password of the .pfx and the keystore')
@click.option('--service-name', default='TeamCity', show_default=True, help='Service to restart')
@click.option('--java-home', envvar='JAVA_HOME', show_envvar=True, help='Java installation root (for keytool)')
@click.option('--provider', type=click.Choice(['gcs', 's3']), default='gcs', show_default=True,
              help='Object store provider')
@click.option('--service-backend', type=click.Choice(['windows', 'systemd']), default='windows',
              show_default=True, help='OS service manager')
@click.option('--server-config-name', default='server.xml', show_default=True,
              help='Configuration file name inside --conf-dir')
@click.option('--no-journal', is_flag=True, help='Do not record the run on disk')
@click.option('--json', 'output_json', is_flag=True, help='Output machine-readable JSON')
def deploy_cmd(bucket, object_name, conf_dir, cert_dir, keystore_password, service_name,
               java_home, provider, service_backend, server_config_name, no_journal, output_json):
    """Fetch the certificate, import it and restart the service."""
    try:
        request = DeploymentRequest(
            bucket=bucket,
            object_name=object_name,
            conf_dir=conf_dir,
            cert_dir=cert_dir,
            keystore_password=keystore_password,
            service_name=service_name,
            java_home=java_home,
            provider=provider,
            service_backend=service_backend,
            server_config_name=server_config_name,
        )
    except ValidationError as e:
        fields = ', '.join('.'.join(str(p) for p in err['loc']) for err in e.errors())
        _fail(f"Invalid deployment parameters: {fields}", output_json)

    result = deploy(request, journal=not no_journal)

    if output_json:
        _json_output(result.to_dict())

    if not result.ok:
        click.echo(f"❌ Deployment failed: {result.error}", err=True)
        sys.exit(1)

    if not output_json:
        click.echo(f"✅ Certificate deployed to {result.keystore}")
        click.echo(f"Service {service_name} restarted (run {result.run_id})")


@main.command()
@click.argument('run_id')
@click.option('--json', 'output_json', is_flag=True, help='Output machine-readable JSON')
def status(run_id, output_json):
    """Show the status of a recorded run."""
    if not run_exists(run_id):
        _fail(f"Run {run_id} not found", output_json, code=2)

    events = read_events(run_id)
    info = {
        'run_id': run_id,
        'status': get_status_from_events(run_id),
        'request': read_request_json(run_id),
    }
    errors = [e for e in events if e.get('type') == 'ERROR']
    if errors:
        info['error'] = errors[-1].get('data', {}).get('reason')

    if output_json:
        _json_output(info)
        return

    click.echo(f"Run: {run_id}")
    click.echo(f"Status: {info['status']}")
    if info.get('error'):
        click.echo(f"Error: {info['error']}")


@main.command()
@click.argument('run_id')
def logs(run_id):
    """Print the event journal of a recorded run."""
    if not run_exists(run_id):
        _fail(f"Run {run_id} not found", False, code=2)

    for event in read_events(run_id):
        click.echo(json.dumps(event))


@main.command()
@click.option('--json', 'output_json', is_flag=True, help='Output machine-readable JSON')
def runs(output_json):
    """List recorded runs, most recent first."""
    entries = [{'run_id': run_id, 'status': get_status_from_events(run_id)} for run_id in list_runs()]

    if output_json:
        _json_output({'runs': entries})
        return

    for entry in entries:
        click.echo(f"{entry['run_id']}  {entry['status']}")


if __name__ == '__main__':
    main()
