from rich.style import Style

from cigate.cli.theme import Theme


class TestTheme:
    def test_every_style_is_valid_rich_markup(self) -> None:
        styles = {k: v for k, v in vars(Theme).items() if k.isupper()}

        assert styles
        for value in styles.values():
            Style.parse(value)

    def test_outcome_styles_are_distinct(self) -> None:
        outcomes = [
            Theme.OUTCOME_PASSED,
            Theme.OUTCOME_FAILED,
            Theme.OUTCOME_LAUNCH_FAILED,
            Theme.OUTCOME_TIMED_OUT,
        ]

        assert len(set(outcomes)) == len(outcomes)

