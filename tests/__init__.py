"""
Uyuni Provider Test Suite

Unit tests run against an in-memory fake Uyuni server (see conftest.py):
- API client, settings and provider configuration
- uyuni_user resource and uyuni_users data source
- Pulumi dynamic provider and CLI
"""
