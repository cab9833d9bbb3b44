def test_parse_returns_segments_and_clean_copy(client):
    content = 'Summarize [text]\n> keep it short\n1. Now translate it\ninto French'

    resp = client.post('/api/v1/annotations/parse', json={'content': content})

    assert resp.status_code == 200
    data = resp.get_json()['data']
    assert [(s['type'], s['lines']) for s in data['segments']] == [
        ('text', [0, 1]),
        ('note', [1, 2]),
        ('followup', [2, 4]),
    ]
    assert data['segments'][2]['content'] == 'Now translate it\ninto French'
    assert data['segments'][0]['parts'][1] == {'type': 'variable', 'content': 'TEXT', 'raw': '[text]'}
    assert data['cleanContent'] == 'Summarize [text]'


def test_parse_requires_string_content(client):
    assert client.post('/api/v1/annotations/parse', json={'content': 3}).status_code == 400
    assert client.post('/api/v1/annotations/parse', json=['x']).status_code == 400


def test_parse_empty_content(client):
    data = client.post('/api/v1/annotations/parse', json={'content': ''}).get_json()['data']
    assert data == {'segments': [], 'followups': [], 'variables': [], 'cleanContent': ''}


def test_fill_reports_missing_variables(client):
    resp = client.post('/api/v1/annotations/fill', json={
        'content': 'Write about [TOPIC] for [audience].',
        'values': {'topic': 'tide pools'},
    })

    assert resp.get_json()['data'] == {
        'content': 'Write about tide pools for [audience].',
        'missing': ['AUDIENCE'],
    }


def test_fill_rejects_non_object_values(client):
    resp = client.post('/api/v1/annotations/fill', json={'content': 'x', 'values': ['a']})
    assert resp.status_code == 400
    assert resp.get_json()['error'] == "'values' must be an object"
