"""Route documentation served at ``GET /``."""

DOCS = {
    'resources': {
        'Timer': {
            'fields': {
                'id': 'Creation time in ms and a random part, e.g. "1700000000000:<uuid>"',
                'group': 'Name of the group the timer belongs to',
                'title': 'Title',
                'start': 'Start date',
                'end': 'End date (null while the timer is running)',
                'hourlyPrice': 'Price per hour',
                '...': 'Anything you attach',
            },
        },
        'Group': {
            'fields': {
                'name': 'Unique name, cannot be changed',
                '...': 'Anything you attach',
            },
        },
        'Consolidation': {
            'fields': {
                'duration': 'Total duration of consolidated timers in ms.',
                'price': 'Total price.',
                'start': 'Start date of the earliest consolidated timer.',
                'end': 'End date of the latest consolidated timer.',
                'countTimers': 'Number of consolidated timers.',
            },
        },
    },
    'filters': {
        'since': 'Only timers started at or after this ISO-8601 date.',
        'until': 'Only timers started before this ISO-8601 date.',
        'title': 'Only timers whose title contains this text (case-insensitive).',
        '<field>': 'Only timers whose field equals this value.',
    },
    'routes': {
        'GET::/timers': {'desc': 'Returns all timers.', 'returns': 'Timers'},
        'DELETE::/timers': {'desc': 'Removes all timers.', 'returns': 'none'},
        'GET::/timers/running': {'desc': 'Returns all running timers.', 'returns': 'Timers'},
        'GET::/timers/consolidate': {'desc': 'Returns consolidation of all timers.', 'returns': 'Consolidation'},
        'GET::/timers/:group': {'desc': 'Returns all timers in a group.', 'returns': 'Timers'},
        'GET::/timers/:group/running': {'desc': 'Returns running timers in a group.', 'returns': 'Timers'},
        'GET::/timers/:group/consolidate': {'desc': 'Returns consolidation of all timers in a group.', 'returns': 'Consolidation'},
        'DELETE::/timers/:group': {'desc': 'Removes all timers in "group".', 'returns': 'none'},
        'POST::/timers/:group/start': {'desc': 'Starts new timer in "group".', 'returns': 'Timer'},
        'GET::/timers/:group/:id': {'desc': 'Returns single timer.', 'returns': 'Timer'},
        'PUT::/timers/:group/:id': {'desc': 'Updates timer in "group" with id "id".', 'returns': 'Timer'},
        'POST::/timers/:group/:id/stop': {'desc': 'Stops existing timer in "group" with id "id".', 'returns': 'Timer'},
        'DELETE::/timers/:group/:id': {'desc': 'Removes existing timer in "group" with id "id".', 'returns': 'none'},
        'GET::/groups': {'desc': 'Returns all groups.', 'returns': 'Groups'},
        'GET::/groups/names': {'desc': 'Returns all group names.', 'returns': 'Strings'},
        'POST::/groups/:name': {'desc': 'Creates group "name".', 'returns': 'Group'},
        'GET::/groups/:name': {'desc': 'Returns single group.', 'returns': 'Group'},
        'PUT::/groups/:name': {'desc': 'Updates group "name".', 'returns': 'Group'},
        'DELETE::/groups/:name': {'desc': 'Removes group "name" and all its timers.', 'returns': 'none'},
        'GET::/groups/:name/timers': {'desc': 'Returns all timers of a group.', 'returns': 'Timers'},
        'GET::/groups/:name/timers/running': {'desc': 'Returns running timers of a group.', 'returns': 'Timers'},
        'GET::/groups/:name/consolidate': {'desc': 'Returns consolidation of all timers of a group.', 'returns': 'Consolidation'},
    },
}
