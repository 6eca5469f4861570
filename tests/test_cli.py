"""Tests for the CLI interface."""

import json

import httpx
import pytest
import respx
from click.testing import CliRunner

from tweet_segments.cli import main
from tweet_segments.config import AppConfig, load_config, save_config


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / "config.toml"


@pytest.fixture
def write_json(tmp_path):
    def _write(name, data):
        path = tmp_path / name
        path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        return str(path)

    return _write


class TestCLI:
    def test_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "Tweet Segments" in result.output

    def test_render_text(self, runner, config_path, write_json, char_reference_status):
        path = write_json("status.json", char_reference_status)
        result = runner.invoke(main, ["--config", str(config_path), "render", path])
        assert result.exit_code == 0
        assert result.output == "ってって #test &<てすと>&&amp;\n"

    def test_render_markdown(self, runner, config_path, write_json, graphql_tweet_result):
        path = write_json("tweet.json", graphql_tweet_result)
        result = runner.invoke(
            main, ["--config", str(config_path), "render", "-f", "markdown", path]
        )
        assert result.exit_code == 0
        assert result.output.startswith("*Replying to [@alice]")
        assert "[#python](https://x.com/hashtag/python)" in result.output

    def test_render_extended_text(self, runner, config_path, write_json, reply_attachment_status):
        path = write_json("reply.json", reply_attachment_status)
        result = runner.invoke(main, ["--config", str(config_path), "render", path])
        assert result.exit_code == 0
        lines = result.output.split("\n")
        assert lines[0] == "Replying to @azyobuzin"
        assert lines[2].startswith("Attachment: https://twitter.com/")

    def test_render_no_extended(self, runner, config_path, write_json, reply_attachment_status):
        path = write_json("reply.json", reply_attachment_status)
        result = runner.invoke(
            main, ["--config", str(config_path), "render", "--no-extended", path]
        )
        assert result.exit_code == 0
        assert result.output == "@azyobuzin pic.twitter.com/abcdEFGH12\n"

    def test_render_json(self, runner, config_path, write_json, graphql_tweet_result):
        path = write_json("tweet.json", graphql_tweet_result)
        result = runner.invoke(
            main, ["--config", str(config_path), "render", "-f", "json", path]
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert len(data["segments"]) == 6
        assert [m["screen_name"] for m in data["hidden_prefix"]] == ["alice", "bob"]
        assert data["hidden_suffix"][0]["url"] == "https://t.co/img456"

    def test_render_csv(self, runner, config_path, write_json, char_reference_status):
        path = write_json("status.json", char_reference_status)
        result = runner.invoke(
            main, ["--config", str(config_path), "render", "-f", "csv", path]
        )
        assert result.exit_code == 0
        assert result.output.startswith("type,start,end,raw_text,text,entity_type")

    def test_render_window(self, runner, config_path, write_json, char_reference_status):
        path = write_json("status.json", char_reference_status)
        result = runner.invoke(
            main,
            ["--config", str(config_path), "render", "--start", "5", "--end", "10", path],
        )
        assert result.exit_code == 0
        assert result.output == "#test\n"

    def test_render_invalid_window(self, runner, config_path, write_json, char_reference_status):
        path = write_json("status.json", char_reference_status)
        result = runner.invoke(
            main, ["--config", str(config_path), "render", "--start", "500", path]
        )
        assert result.exit_code == 1
        assert "out of range" in result.output

    def test_render_list(self, runner, config_path, write_json, char_reference_status, non_bmp_status):
        path = write_json("statuses.json", [char_reference_status, non_bmp_status])
        result = runner.invoke(main, ["--config", str(config_path), "render", path])
        assert result.exit_code == 0
        assert "ってって #test" in result.output
        assert "pic.twitter.com/KmtlVpXaUN" in result.output

    def test_render_uses_config_format(self, runner, config_path, write_json, char_reference_status):
        save_config(AppConfig(output_format="markdown"), config_path)
        path = write_json("status.json", char_reference_status)
        result = runner.invoke(main, ["--config", str(config_path), "render", path])
        assert result.exit_code == 0
        assert "[#test](https://x.com/hashtag/test)" in result.output

    def test_render_missing_file(self, runner, config_path, tmp_path):
        result = runner.invoke(
            main, ["--config", str(config_path), "render", str(tmp_path / "nope.json")]
        )
        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_render_empty_list(self, runner, config_path, write_json):
        path = write_json("empty.json", [])
        result = runner.invoke(main, ["--config", str(config_path), "render", path])
        assert result.exit_code == 1
        assert "No posts found" in result.output

    @respx.mock
    def test_render_remote(self, runner, config_path, char_reference_status):
        url = "https://example.com/status.json"
        respx.get(url).mock(return_value=httpx.Response(200, json=char_reference_status))
        result = runner.invoke(main, ["--config", str(config_path), "render", url])
        assert result.exit_code == 0
        assert "ってって" in result.output

    def test_source(self, runner, config_path, write_json, non_bmp_status, char_reference_status):
        path = write_json("statuses.json", [non_bmp_status, char_reference_status])
        result = runner.invoke(main, ["--config", str(config_path), "source", path])
        assert result.exit_code == 0
        lines = result.output.strip().split("\n")
        assert lines[0] == (
            "469054246503989248\tTwitter for iPhone\thttp://twitter.com/download/iphone"
        )
        assert lines[1] == "469059084289708032\tweb"

    def test_avatar(self, runner, config_path, write_json, non_bmp_status):
        path = write_json("status.json", non_bmp_status)
        result = runner.invoke(
            main, ["--config", str(config_path), "avatar", "--size", "orig", path]
        )
        assert result.exit_code == 0
        assert result.output == "https://pbs.twimg.com/profile_images/378800000/icon.png\n"

    def test_avatar_http(self, runner, config_path, write_json, non_bmp_status):
        path = write_json("status.json", non_bmp_status)
        result = runner.invoke(
            main, ["--config", str(config_path), "avatar", "--http", "--size", "bigger", path]
        )
        assert result.exit_code == 0
        assert result.output.startswith("http://")
        assert "icon_bigger.png" in result.output

    def test_avatar_without_user(self, runner, config_path, write_json, char_reference_status):
        path = write_json("status.json", char_reference_status)
        result = runner.invoke(main, ["--config", str(config_path), "avatar", path])
        assert result.exit_code == 1
        assert "no user object" in result.output

    def test_decode(self, runner):
        result = runner.invoke(main, ["decode", "a&amp;b &#x266A;"])
        assert result.exit_code == 0
        assert result.output == "a&b ♪\n"

    def test_decode_malformed(self, runner):
        result = runner.invoke(main, ["decode", "&#xZZ;"])
        assert result.exit_code == 1
        assert "Malformed numeric" in result.output

    def test_setup_creates_config(self, runner, config_path):
        result = runner.invoke(
            main,
            ["--config", str(config_path), "setup"],
            input="markdown\nn\nhttps://twitter.com/\nbigger\n10\n",
        )
        assert result.exit_code == 0
        assert "Config saved" in result.output
        config = load_config(config_path)
        assert config.output_format == "markdown"
        assert config.extended is False
        assert config.link_base == "https://twitter.com"
        assert config.profile_image_size == "bigger"
        assert config.http_timeout == 10.0
