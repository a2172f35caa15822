"""Tests for playground page rendering."""

from outpost.graphql.playground import PLAYGROUND_VERSION, playground_html


class TestPlaygroundHtml:
    """Tests for playground_html."""

    def test_defaults(self) -> None:
        """The default page targets the root path."""
        page = playground_html()

        assert page.startswith("<!DOCTYPE html>")
        assert '{"endpoint": "/", "subscriptionEndpoint": "/ws"}' in page
        assert "<title>GraphQL Playground</title>" in page

    def test_loads_pinned_assets(self) -> None:
        """Playground assets come from the pinned release."""
        page = playground_html()

        assert f"graphql-playground-react@{PLAYGROUND_VERSION}/build/static/js/middleware.js" in page

    def test_custom_endpoint(self) -> None:
        """The endpoint is configurable."""
        page = playground_html(endpoint="/graphql")

        assert '"endpoint": "/graphql"' in page

    def test_subscription_endpoint_omitted(self) -> None:
        """No subscription endpoint is advertised when unset."""
        page = playground_html(subscription_endpoint=None)

        assert "subscriptionEndpoint" not in page

    def test_title_escaped(self) -> None:
        """Titles are HTML escaped."""
        page = playground_html(title="<b>API</b>")

        assert "<title>&lt;b&gt;API&lt;/b&gt;</title>" in page

    def test_script_close_escaped(self) -> None:
        """Config values cannot terminate the inline script."""
        page = playground_html(endpoint="/</script>")

        assert "/</script>\"" not in page
        assert "<\\/script>" in page
