import pytest

from sales_leaderboard.commands import handle_command


def test_help_and_empty_text(store, as_of):
    for text in ("", "   ", "help", "HELP"):
        resp = handle_command(text, store, as_of=as_of)
        assert resp["response_type"] == "ephemeral"
        assert "record" in resp["text"] and "leaderboard" in resp["text"]


def test_record_then_leaderboard(store, as_of):
    resp = handle_command("record arr Sarah 50000 Acme Corp", store, as_of=as_of)
    assert resp["response_type"] == "in_channel"
    for part in ("$50,000", "Sarah", "Acme Corp"):
        assert part in resp["text"]

    board = handle_command("leaderboard arr", store, as_of=as_of)
    assert board["response_type"] == "in_channel"
    assert "🥇 *Sarah* — $50,000" in board["text"]


def test_time_average(store, as_of):
    handle_command("record time Maria 14", store, as_of=as_of)
    handle_command("record time Maria 6", store, as_of=as_of)

    text = handle_command("leaderboard time", store, as_of=as_of)["text"]
    assert "*Maria* — 10 days avg (2 deals)" in text


@pytest.mark.parametrize("shortcut", ["arr", "pilot", "time", "ARR"])
def test_shortcuts_match_leaderboard(store, as_of, shortcut):
    handle_command("record pilot John 2 BigCo", store, as_of=as_of)
    handle_command("record arr John 10", store, as_of=as_of)
    assert handle_command(shortcut, store, as_of=as_of) == handle_command(
        f"leaderboard {shortcut}", store, as_of=as_of
    )


def test_leaderboard_reads_are_idempotent(store, as_of):
    handle_command("record pilot John 2", store, as_of=as_of)
    first = handle_command("pilot", store, as_of=as_of)
    assert handle_command("pilot", store, as_of=as_of) == first
    assert "*John* — 2 pilots" in first["text"]


@pytest.mark.parametrize("value", ["0", "-5", "abc", "nan", "inf", "$"])
def test_bad_values_rejected_without_write(store, as_of, value):
    resp = handle_command(f"record arr Sarah {value}", store, as_of=as_of)
    assert resp["response_type"] == "ephemeral"
    assert "positive number" in resp["text"]
    assert store.keys("") == []


def test_value_accepts_dollar_and_commas(store, as_of):
    resp = handle_command("record arr Sarah $50,000", store, as_of=as_of)
    assert "$50,000" in resp["text"]


@pytest.mark.parametrize("text", ["record", "record arr", "record arr Sarah"])
def test_missing_tokens(store, as_of, text):
    resp = handle_command(text, store, as_of=as_of)
    assert resp["response_type"] == "ephemeral"
    assert "Usage" in resp["text"]


def test_bad_record_type(store, as_of):
    resp = handle_command("record deals Sarah 10", store, as_of=as_of)
    assert resp == {"response_type": "ephemeral", "text": "❌ Type must be: arr, pilot, or time"}


@pytest.mark.parametrize("text", ["leaderboard", "leaderboard deals"])
def test_bad_leaderboard_type(store, as_of, text):
    resp = handle_command(text, store, as_of=as_of)
    assert resp["response_type"] == "ephemeral"
    assert "/sales leaderboard <type>" in resp["text"]


def test_unknown_command(store, as_of):
    resp = handle_command("dance", store, as_of=as_of)
    assert resp["response_type"] == "ephemeral"
    assert "Unknown command" in resp["text"]


def test_empty_leaderboard_is_not_an_error(store, as_of):
    resp = handle_command("leaderboard time", store, as_of=as_of)
    assert resp["response_type"] == "in_channel"
    assert "No records yet this month" in resp["text"]


def test_huge_arr_value_renders_and_ranks(store, as_of):
    handle_command("record arr Bob 100", store, as_of=as_of)
    resp = handle_command("record arr Sarah 1e30", store, as_of=as_of)
    assert resp["response_type"] == "in_channel"
    assert f"${int(1e30):,}" in resp["text"]

    board = handle_command("leaderboard arr", store, as_of=as_of)["text"]
    assert f"🥇 *Sarah* — ${int(1e30):,}" in board
    assert "🥈 *Bob* — $100" in board


def test_huge_time_value_renders(store, as_of):
    resp = handle_command("record time Maria 1e29", store, as_of=as_of)
    assert resp["response_type"] == "in_channel"
    assert f"pilot in {int(1e29)} days" in resp["text"]
    assert "*Maria* —" in handle_command("leaderboard time", store, as_of=as_of)["text"]


def test_mentions_in_names_are_escaped(store, as_of):
    resp = handle_command("record arr <!channel> 1 <@U123> & co", store, as_of=as_of)
    assert "<!channel>" not in resp["text"]
    assert "*&lt;!channel&gt;*" in resp["text"]
    assert "_&lt;@U123&gt; &amp; co_" in resp["text"]
    assert "*&lt;!channel&gt;*" in handle_command("arr", store, as_of=as_of)["text"]
