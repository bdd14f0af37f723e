import click

from contact_relay.client import ContactFormSubmitter


@click.command('ping-contact')
@click.argument('api_url')
@click.option('--page', default='', help='Page URL sent with the inquiry; its origin becomes the Origin header.')
@click.option('--origin', default=None, help='Explicit Origin header.')
def ping_contact_command(api_url, page, origin):
    """POST a fixed test inquiry to API_URL and print the result."""
    submitter = ContactFormSubmitter(api_url, page_url=page, origin=origin, timeout=30)
    status, text = submitter.ping()
    if status is None:
        click.echo(f"Network error: {text}", err=True)
        raise SystemExit(1)
    click.echo(f"{status} {text}")
    if status >= 400:
        raise SystemExit(1)
