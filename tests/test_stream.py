from urllib.parse import quote

from conftest import random_bytes


def test_full_body_without_range(client, sample_video):
    name, payload = sample_video
    r = client.get(f'/api/video/{name}')
    assert r.status_code == 200
    assert int(r.headers['Content-Length']) == len(payload)
    assert r.headers['Content-Type'] == 'video/mp4'
    assert r.headers['Accept-Ranges'] == 'bytes'
    assert 'Content-Range' not in r.headers
    assert r.data == payload


def test_first_hundred_bytes(client, sample_video):
    name, payload = sample_video
    r = client.get(f'/api/video/{name}', headers={'Range': 'bytes=0-99'})
    assert r.status_code == 206
    assert r.headers['Content-Range'] == f'bytes 0-99/{len(payload)}'
    assert r.headers['Accept-Ranges'] == 'bytes'
    assert r.headers['Content-Length'] == '100'
    assert r.data == payload[:100]


def test_open_ended_range(client, sample_video):
    name, payload = sample_video
    r = client.get(f'/api/video/{name}', headers={'Range': 'bytes=100-'})
    assert r.status_code == 206
    assert r.headers['Content-Range'] == f'bytes 100-{len(payload) - 1}/{len(payload)}'
    assert len(r.data) == len(payload) - 100
    assert r.data == payload[100:]


def test_middle_range_crosses_chunks(client, sample_video):
    name, payload = sample_video
    r = client.get(f'/api/video/{name}', headers={'Range': 'bytes=63-700'})
    assert r.status_code == 206
    assert r.data == payload[63:701]


def test_two_ranges_reassemble_file(client, sample_video):
    name, payload = sample_video
    head = client.get(f'/api/video/{name}', headers={'Range': 'bytes=0-49'})
    tail = client.get(f'/api/video/{name}', headers={'Range': 'bytes=50-'})
    assert head.data + tail.data == payload


def test_range_beyond_eof_is_416(client, sample_video):
    name, payload = sample_video
    total = len(payload)
    r = client.get(f'/api/video/{name}', headers={'Range': f'bytes={total}-{total + 10}'})
    assert r.status_code == 416
    assert r.headers['Content-Range'] == f'bytes */{total}'
    assert r.data == b''


def test_malformed_range_is_416(client, sample_video):
    name, payload = sample_video
    for header in ('bytes=abc-', 'bytes=-100', 'bytes=0-10,20-30', 'pages=1-2'):
        r = client.get(f'/api/video/{name}', headers={'Range': header})
        assert r.status_code == 416, header
        assert r.headers['Content-Range'] == f'bytes */{len(payload)}'


def test_missing_file_is_404_json(client):
    r = client.get('/api/video/nothing.mp4')
    assert r.status_code == 404
    assert r.get_json() == {'error': 'Video not found'}


def test_unlisted_extension_is_404(client, media_root):
    (media_root / 'notes.txt').write_text('hello')
    assert client.get('/api/video/notes.txt').status_code == 404


def test_percent_encoded_and_quoted_names(client, media_root):
    payload = random_bytes(300, seed=7)
    (media_root / 'my clip.mkv').write_bytes(payload)
    r = client.get('/api/video/' + quote('"my clip.mkv"'))
    assert r.status_code == 200
    assert r.headers['Content-Type'] == 'video/x-matroska'
    assert r.data == payload


def test_empty_file(client, media_root):
    (media_root / 'empty.mp4').write_bytes(b'')
    r = client.get('/api/video/empty.mp4')
    assert r.status_code == 200
    assert r.headers['Content-Length'] == '0'
    assert r.data == b''
    assert client.get('/api/video/empty.mp4', headers={'Range': 'bytes=0-'}).status_code == 416


def test_head_sends_headers_only(client, sample_video):
    name, payload = sample_video
    r = client.head(f'/api/video/{name}', headers={'Range': 'bytes=10-19'})
    assert r.status_code == 206
    assert r.headers['Content-Length'] == '10'
    assert r.data == b''


def test_cors_header(client, sample_video):
    name, _ = sample_video
    r = client.get(f'/api/video/{name}', headers={'Range': 'bytes=0-0'})
    assert r.headers['Access-Control-Allow-Origin'] == '*'
    assert 'Content-Range' in r.headers['Access-Control-Expose-Headers']


def test_unknown_route_is_json_404(client):
    r = client.get('/api/nothing-here')
    assert r.status_code == 404
    assert 'error' in r.get_json()


def test_oversized_offsets(client, sample_video):
    name, payload = sample_video
    total = len(payload)
    r = client.get(f'/api/video/{name}', headers={'Range': 'bytes=' + '9' * 5000 + '-'})
    assert r.status_code == 416
    assert r.headers['Content-Range'] == f'bytes */{total}'
    r = client.get(f'/api/video/{name}', headers={'Range': 'bytes=10-' + '9' * 5000})
    assert r.status_code == 206
    assert r.headers['Content-Range'] == f'bytes 10-{total - 1}/{total}'
    assert r.data == payload[10:]


def test_empty_range_header_is_416(client, sample_video):
    name, payload = sample_video
    r = client.get(f'/api/video/{name}', headers={'Range': ''})
    assert r.status_code == 416
    assert r.headers['Content-Range'] == f'bytes */{len(payload)}'


def test_every_listed_name_can_be_played(client, media_root):
    for i, name in enumerate((' spaced.mp4', 'trailing .mkv', "it's.avi", 'plain.mp4')):
        (media_root / name).write_bytes(random_bytes(50, seed=i))
    names = client.get('/api/videos').get_json()
    assert len(names) == 4
    for name in names:
        r = client.get('/api/video/' + quote(name))
        assert r.status_code == 200, name
        assert r.data == (media_root / name).read_bytes()
