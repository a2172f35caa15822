"""GraphQL Playground page rendering."""

import html
import json

PLAYGROUND_VERSION = "1.7.26"

_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="user-scalable=no, initial-scale=1.0, minimum-scale=1.0, maximum-scale=1.0, minimal-ui" />
  <title>{title}</title>
  <link rel="stylesheet" href="https://cdn.jsdelivr.net/npm/graphql-playground-react@{version}/build/static/css/index.css" />
  <link rel="shortcut icon" href="https://cdn.jsdelivr.net/npm/graphql-playground-react@{version}/build/favicon.png" />
  <script src="https://cdn.jsdelivr.net/npm/graphql-playground-react@{version}/build/static/js/middleware.js"></script>
</head>
<body>
  <div id="root"></div>
  <script>
    window.addEventListener("load", function () {{
      GraphQLPlayground.init(document.getElementById("root"), {config});
    }});
  </script>
</body>
</html>
"""


def playground_html(
    endpoint: str = "/",
    subscription_endpoint: str | None = "/ws",
    title: str = "GraphQL Playground",
) -> str:
    """Render the playground page.

    Args:
        endpoint: Path the playground sends queries to
        subscription_endpoint: Subscription endpoint advertised to the client
        title: Page title

    Returns:
        HTML document
    """
    config: dict[str, str] = {"endpoint": endpoint}
    if subscription_endpoint:
        config["subscriptionEndpoint"] = subscription_endpoint

    # "</" inside the inline script would close the tag early
    config_js = json.dumps(config).replace("</", "<\\/")

    return _TEMPLATE.format(
        title=html.escape(title),
        version=PLAYGROUND_VERSION,
        config=config_js,
    )
