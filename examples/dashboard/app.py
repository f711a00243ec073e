"""Dashboard -- components composed from templates and partials.

A page template lays out KPI tiles, an activity feed and a profile card.
Partials keep each region small; block helpers turn enclosed template
content into a component's children.

Run:
    python app.py
"""

from motif import DictLoader, Environment

templates = {
    "dashboard.hbs": """\
<main class="grid gap-6">
  <section class="grid grid-cols-3 gap-4">
    {{#each stats}}{{> stat}}{{/each}}
  </section>
  {{#card}}
    {{#cardHeader}}{{cardTitle children="Recent activity"}}{{/cardHeader}}
    {{#cardContent}}{{#each events}}{{> event}}{{/each}}{{/cardContent}}
  {{/card}}
  {{> profile user=viewer}}
</main>
""",
    "stat": """\
{{kpi title=label value=value change=change trend=trend changeDescription="vs last month"}}""",
    "event": """\
{{activityItem title=title description=detail timeAgo=when statusColor=color hasBorder=(not @last)}}""",
    "profile": """\
{{#card variant="outlined"}}
  {{#cardHeader}}
    {{avatar name=user.name size="lg"}}
    {{#cardTitle}}{{user.name}} {{#if user.admin}}{{badge children="Admin" variant="secondary"}}{{/if}}{{/cardTitle}}
  {{/cardHeader}}
  {{#cardContent}}{{userInfoFields user=user}}{{/cardContent}}
  {{#cardFooter}}{{button children="Edit profile" href=(lookup user "url") variant="outline"}}{{/cardFooter}}
{{/card}}""",
}

env = Environment(loader=DictLoader(templates))

output = env.render(
    "dashboard.hbs",
    stats=[
        {"label": "Revenue", "value": "$48,210", "change": "+12%", "trend": "up"},
        {"label": "Active users", "value": 1832, "change": "-3%", "trend": "down"},
        {"label": "Open tickets", "value": 0},
    ],
    events=[
        {"title": "Deploy finished", "detail": "api v2.4.1", "when": "2m ago", "color": "green"},
        {"title": "Invoice <#1042> paid", "when": "1h ago", "color": "blue"},
    ],
    viewer={
        "id": 7,
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "admin": True,
        "url": "/users/7/edit",
    },
)


def main() -> None:
    print(output)


if __name__ == "__main__":
    main()
