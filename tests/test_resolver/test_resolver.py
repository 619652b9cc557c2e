"""Tests for SentryProjectResolver."""

import pytest

from sentry_php.api.errors import SentryResolutionError
from sentry_php.console import USE_DEFAULT
from sentry_php.models import Project, SentrySession
from sentry_php.resolver import SentryProjectResolver, parse_sample_rate


def make_resolver(api, console, app_name='my-app', **kwargs):
    return SentryProjectResolver(api_client=api, console=console, app_name=app_name, **kwargs)


class TestDiscoverOrganization:
    """Tests for organization discovery."""

    def test_uses_first_organization(self, populated_api, console_factory):
        resolver = make_resolver(populated_api, console_factory())

        session = resolver.discover_organization(SentrySession())

        assert session.organization.slug == 'acme'
        assert populated_api.paths() == ['organizations/']

    def test_no_organization_raises(self, mock_api, console_factory):
        mock_api.set_response('organizations/', [])
        resolver = make_resolver(mock_api, console_factory())

        with pytest.raises(SentryResolutionError, match="No Sentry organization"):
            resolver.discover_organization(SentrySession())


class TestResolveProject:
    """Tests for the project decision policy."""

    def test_candidates_filtered_to_laravel_in_api_order(self, populated_api, console_factory):
        resolver = make_resolver(populated_api, console_factory())

        candidates = resolver.list_candidate_projects()

        assert [p.name for p in candidates] == ['shop', 'billing']
        assert all(p.platform == 'php-laravel' for p in candidates)

    def test_app_name_match_goes_straight_to_selection(self, populated_api, console_factory, organization):
        console = console_factory(USE_DEFAULT)
        resolver = make_resolver(populated_api, console, app_name='shop')

        session = resolver.resolve_project(SentrySession(organization=organization))

        assert session.project.slug == 'shop'
        assert console.questions('confirm') == []
        kind, question, options, default = console.prompts[0]
        assert question == 'Select a Sentry project'
        assert options == ['billing', 'shop', 'Create new project']
        assert default == 'shop'

    def test_confirm_creates_project(self, populated_api, console_factory, organization):
        console = console_factory(True, 'Backend', USE_DEFAULT)
        resolver = make_resolver(populated_api, console)

        session = resolver.resolve_project(SentrySession(organization=organization))

        assert session.project.name == 'my-app'
        assert session.project.platform == 'php-laravel'
        assert populated_api.paths('POST') == ['teams/acme/backend/projects/']
        assert populated_api.created == [{'slug': 'my-app', 'name': 'my-app', 'platform': 'php-laravel'}]

        _, _, team_options, team_default = console.prompts[1]
        assert team_options == ['Backend', 'Web']
        assert team_default is None
        assert console.prompts[2][3] == 'my-app'

    def test_single_team_is_default(self, populated_api, console_factory, organization):
        populated_api.set_response('organizations/acme/teams/', [{'slug': 'web', 'name': 'Web'}])
        console = console_factory(True, USE_DEFAULT, 'New App')
        resolver = make_resolver(populated_api, console)

        session = resolver.resolve_project(SentrySession(organization=organization))

        assert console.prompts[1][3] == 'Web'
        assert session.project.slug == 'new-app'
        assert populated_api.paths('POST') == ['teams/acme/web/projects/']

    def test_decline_create_selects_existing(self, populated_api, console_factory, organization):
        console = console_factory(False, 'billing')
        resolver = make_resolver(populated_api, console)

        session = resolver.resolve_project(SentrySession(organization=organization))

        assert session.project.slug == 'billing'
        assert populated_api.paths('POST') == []
        _, _, options, default = console.prompts[1]
        assert options == ['billing', 'shop', 'Create new project']
        assert default is None

    def test_create_new_entry_creates_project(self, populated_api, console_factory, organization):
        console = console_factory('Create new project', 'Web', 'shop-2')
        resolver = make_resolver(populated_api, console, app_name='shop')

        session = resolver.resolve_project(SentrySession(organization=organization))

        assert session.project.name == 'shop-2'
        assert populated_api.paths('POST') == ['teams/acme/web/projects/']

    def test_no_projects_second_chance_to_create(self, populated_api, console_factory, organization):
        populated_api.set_response('projects/', [{'slug': 'spa', 'name': 'spa', 'platform': 'javascript'}])
        console = console_factory(False, True, 'Backend', USE_DEFAULT)
        resolver = make_resolver(populated_api, console)

        session = resolver.resolve_project(SentrySession(organization=organization))

        assert session.project.name == 'my-app'
        assert console.errors == ['No existing php-laravel projects found!']

    def test_no_projects_declined_twice(self, populated_api, console_factory):
        populated_api.set_response('projects/', [{'slug': 'spa', 'name': 'spa', 'platform': 'javascript'}])
        console = console_factory(False, False)
        resolver = make_resolver(populated_api, console)

        session = resolver.resolve()

        assert session.project is None
        assert session.dsn is None
        assert session.sample_rate is None
        assert not any('keys' in path for path in populated_api.paths())
        assert console.questions('ask') == []
        assert console.errors == [
            'No existing php-laravel projects found!',
            'No project selected! Disabling Sentry plugin.',
        ]

    def test_no_teams_raises(self, populated_api, console_factory, organization):
        populated_api.set_response('organizations/acme/teams/', [])
        resolver = make_resolver(populated_api, console_factory(True))

        with pytest.raises(SentryResolutionError, match="No Sentry team"):
            resolver.resolve_project(SentrySession(organization=organization))


class TestResolveClientKey:
    """Tests for client key selection."""

    def test_selects_key_dsn(self, populated_api, console_factory, organization):
        console = console_factory('Default')
        resolver = make_resolver(populated_api, console)
        session = SentrySession(organization=organization, project=Project('shop', 'shop', 'php-laravel'))

        session = resolver.resolve_client_key(session)

        assert session.dsn == 'https://abc@sentry.io/1'
        _, _, options, default = console.prompts[0]
        assert options == ['Default', 'Production']
        assert default is None

    def test_no_project_skips_key_lookup(self, populated_api, console_factory, organization):
        resolver = make_resolver(populated_api, console_factory())

        session = resolver.resolve_client_key(SentrySession(organization=organization))

        assert session.dsn is None
        assert populated_api.call_count == 0

    def test_no_keys_raises(self, populated_api, console_factory, organization):
        populated_api.set_response('projects/acme/shop/keys/', [])
        resolver = make_resolver(populated_api, console_factory())
        session = SentrySession(organization=organization, project=Project('shop', 'shop', 'php-laravel'))

        with pytest.raises(SentryResolutionError, match="No client key"):
            resolver.resolve_client_key(session)


class TestResolveSampleRate:
    """Tests for the traces sample rate prompt."""

    @pytest.fixture
    def dsn_session(self):
        return SentrySession(dsn='https://abc@sentry.io/1')

    @pytest.mark.parametrize('value,expected', [('0', 0.0), ('0.5', 0.5), ('1', 1.0)])
    def test_accepts_values_in_range(self, mock_api, console_factory, dsn_session, value, expected):
        console = console_factory(value)
        resolver = make_resolver(mock_api, console)

        session = resolver.resolve_sample_rate(dsn_session)

        assert session.sample_rate == expected
        assert console.errors == []

    @pytest.mark.parametrize('value', ['-0.1', '1.1', 'abc'])
    def test_rejects_and_asks_again(self, mock_api, console_factory, dsn_session, value):
        console = console_factory(value, '0.5')
        resolver = make_resolver(mock_api, console)

        session = resolver.resolve_sample_rate(dsn_session)

        assert session.sample_rate == 0.5
        assert len(console.questions('ask')) == 2
        assert console.errors == ['Invalid value! Enter a number between 0.0 and 1.0.']

    def test_blank_disables(self, mock_api, console_factory, dsn_session):
        console = console_factory('')
        resolver = make_resolver(mock_api, console)

        session = resolver.resolve_sample_rate(dsn_session)

        assert session.sample_rate is None
        assert console.errors == []

    def test_input_error_asks_again(self, mock_api, console_factory, dsn_session):
        console = console_factory(ValueError('unreadable'), '0.25')
        resolver = make_resolver(mock_api, console)

        assert resolver.resolve_sample_rate(dsn_session).sample_rate == 0.25

    def test_gives_up_after_max_attempts(self, mock_api, console_factory, dsn_session):
        console = console_factory('abc', '2', '-1', '0.5')
        resolver = make_resolver(mock_api, console, sample_rate_attempts=3)

        session = resolver.resolve_sample_rate(dsn_session)

        assert session.sample_rate is None
        assert len(console.errors) == 3
        assert console.answers == ['0.5']

    def test_shows_performance_docs(self, mock_api, console_factory, dsn_session):
        console = console_factory('')
        make_resolver(mock_api, console).resolve_sample_rate(dsn_session)

        assert 'More info: https://docs.sentry.io/platforms/php/performance/' in console.messages

    def test_skipped_without_dsn(self, mock_api, console_factory):
        console = console_factory()
        session = make_resolver(mock_api, console).resolve_sample_rate(SentrySession())

        assert session.sample_rate is None
        assert console.prompts == []


class TestParseSampleRate:
    def test_bounds_inclusive(self):
        assert parse_sample_rate('0') == 0.0
        assert parse_sample_rate('1.0') == 1.0

    @pytest.mark.parametrize('value', ['nan', 'inf', '1.0001', '', 'half'])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_sample_rate(value)


class TestResolve:
    def test_full_flow(self, populated_api, console_factory):
        console = console_factory(USE_DEFAULT, 'Default', '0.25')
        resolver = make_resolver(populated_api, console, app_name='shop')

        session = resolver.resolve()

        assert session.organization.slug == 'acme'
        assert session.project.slug == 'shop'
        assert session.dsn == 'https://abc@sentry.io/1'
        assert session.sample_rate == 0.25
        assert populated_api.paths() == [
            'organizations/',
            'projects/',
            'projects/acme/shop/keys/',
        ]


class TestSampleRateAbort:
    def test_abort_from_console_ends_run(self, mock_api, console_factory):
        import click

        console = console_factory(click.Abort(), '0.5')
        resolver = make_resolver(mock_api, console)

        with pytest.raises(click.Abort):
            resolver.resolve_sample_rate(SentrySession(dsn='https://abc@sentry.io/1'))
        assert console.answers == ['0.5']
