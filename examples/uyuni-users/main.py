"""
Uyuni Users Example - Manage Uyuni users from a Pulumi program.

Connection settings come from UYUNI_HOST, UYUNI_USERNAME and UYUNI_PASSWORD
unless a ProviderConfig is passed explicitly.

Run with:
  pulumi up
"""

import pulumi

from uyuni_provider.pulumi_providers import User, get_users

simone = User(
    "sgiertz",
    login="sgiertz",
    password="test123",
    firstname="Simone",
    lastname="Giertz",
    email="sgiertz@foo.bar",
)

pulumi.export("user", simone.login)
pulumi.export("logins", [user.login for user in get_users()])
