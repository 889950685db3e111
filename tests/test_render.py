from repo_tunes.models import ArtistRecord, ErrorKind, RunState, RunStatus, SongRecord
from repo_tunes.render import TextSurface, song_count_label


def _artist(songs=(), icon_url=None):
    return ArtistRecord(display_name="night owls", folder_name="night_owls", songs=songs, icon_url=icon_url)


def test_song_count_label():
    assert song_count_label(0) == "0 songs"
    assert song_count_label(1) == "1 song"
    assert song_count_label(2) == "2 songs"


def test_loading_states(config, capsys):
    surface = TextSurface(config)
    surface.show(RunState(status=RunStatus.LOADING, run_token=1))
    surface.show(RunState(status=RunStatus.LOADING, run_token=1, pending_artists=4))

    out = capsys.readouterr().out.splitlines()
    assert out == ["[loading] loading music...", "[loading] Loading 4 artists..."]


def test_repository_not_found_panel(config, capsys):
    TextSurface(config).show(
        RunState(status=RunStatus.ERROR, error_kind=ErrorKind.REPOSITORY_NOT_FOUND, error_message="x")
    )
    out = capsys.readouterr().out
    assert "Repository Not Found" in out
    assert "octo/tunes" in out
    assert "repository is public" in out


def test_generic_error_panel(config, capsys):
    TextSurface(config).show(
        RunState(
            status=RunStatus.ERROR,
            error_kind=ErrorKind.LISTING_FAILED,
            error_message="GitHub API error: 403 for /",
        )
    )
    out = capsys.readouterr().out
    assert "GitHub API error: 403" in out
    assert "Repository Not Found" not in out


def test_empty_state(config, capsys):
    TextSurface(config).show(RunState(status=RunStatus.EMPTY))
    assert capsys.readouterr().out.startswith("[empty]")


def test_loaded_listing(config, capsys):
    song = SongRecord(filename="a.mp3", title="a", media_url="https://raw.example/a.mp3")
    artists = (_artist(songs=(song,), icon_url="https://raw.example/icon.png"), _artist())
    TextSurface(config).show(RunState(status=RunStatus.LOADED, artists=artists))

    out = capsys.readouterr().out
    assert out.splitlines()[0] == "Artists (2)"
    assert "night owls (1 song)" in out
    assert "icon: https://raw.example/icon.png" in out
    assert "https://raw.example/a.mp3" in out
    assert "night owls (0 songs)" in out
    assert "icon: [N]" in out
    assert "No songs found for this artist." in out
