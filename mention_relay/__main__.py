from mention_relay.app import cli

cli()
