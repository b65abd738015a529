# pylint: disable=redefined-outer-name,missing-function-docstring,unused-argument
"""
Tests for rolldice.notation
"""
import pytest

import rolldice.exc
import rolldice.notation
from rolldice.notation import Token
from rolldice.roll import RollSpec


def test_regex_is_number():
    assert rolldice.notation.IS_NUMBER.fullmatch('42')
    assert not rolldice.notation.IS_NUMBER.fullmatch('')
    assert not rolldice.notation.IS_NUMBER.fullmatch('-4')
    assert not rolldice.notation.IS_NUMBER.fullmatch('+4')
    assert not rolldice.notation.IS_NUMBER.fullmatch('4_0')
    assert not rolldice.notation.IS_NUMBER.fullmatch('٤')


def test_clean_notation():
    assert rolldice.notation.clean_notation(' 4 d6\tkh3\n') == '4d6kh3'


def test_tokenize():
    assert rolldice.notation.tokenize('4d6kh3') == [
        Token(None, '4', 0),
        Token('d', '6', 1),
        Token('kh', '3', 3),
    ]


def test_tokenize_all_markers():
    assert rolldice.notation.tokenize('2d6rr2lim1') == [
        Token(None, '2', 0),
        Token('d', '6', 1),
        Token('rr', '2', 3),
        Token('lim', '1', 6),
    ]


def test_tokenize_no_markers():
    assert rolldice.notation.tokenize('46') == [Token(None, '46', 0)]
    assert rolldice.notation.tokenize('') == [Token(None, '', 0)]


def test_tokenize_bounds_on_next_marker():
    assert rolldice.notation.tokenize('4kh1d6') == [
        Token(None, '4', 0),
        Token('kh', '1', 1),
        Token('d', '6', 4),
    ]
    assert rolldice.notation.tokenize('d6kh') == [
        Token(None, '', 0),
        Token('d', '6', 0),
        Token('kh', '', 2),
    ]


def test_tokenize_garbage_stays_in_text():
    assert rolldice.notation.tokenize('4d6xkh3y') == [
        Token(None, '4', 0),
        Token('d', '6x', 1),
        Token('kh', '3y', 4),
    ]


@pytest.mark.parametrize('count,sides', [
    (1, 1), (1, 6), (4, 6), (2, 20), (10, 100), (999, 1000),
])
def test_parse_notation_simple(count, sides):
    spec = rolldice.notation.parse_notation('{}d{}'.format(count, sides))
    assert spec == RollSpec(dice_count=count, dice_sides=sides, keep_highest=0, keep_lowest=0,
                            reroll_threshold=0, reroll_limit=0)


def test_parse_notation_keep_highest():
    assert rolldice.notation.parse_notation('4d6kh3') == RollSpec(4, 6, keep_highest=3)


def test_parse_notation_keep_lowest():
    assert rolldice.notation.parse_notation('2d20kl1') == RollSpec(2, 20, keep_lowest=1)


def test_parse_notation_reroll_limit():
    assert rolldice.notation.parse_notation('2d6rr2lim1') == RollSpec(
        2, 6, reroll_threshold=2, reroll_limit=1)


def test_parse_notation_reroll_no_limit():
    assert rolldice.notation.parse_notation('2d6rr2') == RollSpec(2, 6, reroll_threshold=2)


def test_parse_notation_everything():
    assert rolldice.notation.parse_notation('6d8kl2rr3lim4') == RollSpec(
        6, 8, keep_lowest=2, reroll_threshold=3, reroll_limit=4)


def test_parse_notation_whitespace():
    assert rolldice.notation.parse_notation(' 4 d6 kh3 ') == RollSpec(4, 6, keep_highest=3)
    assert rolldice.notation.parse_notation('2d6\trr2\nlim1') == RollSpec(
        2, 6, reroll_threshold=2, reroll_limit=1)


def test_parse_notation_any_order():
    assert rolldice.notation.parse_notation('4kh1d6') == rolldice.notation.parse_notation('4d6kh1')
    assert rolldice.notation.parse_notation('2d6lim1rr2') == RollSpec(
        2, 6, reroll_threshold=2, reroll_limit=1)


def test_parse_notation_limits_at_bounds():
    assert rolldice.notation.parse_notation('4d6kh4') == RollSpec(4, 6, keep_highest=4)
    assert rolldice.notation.parse_notation('4d6rr6') == RollSpec(4, 6, reroll_threshold=6)
    assert rolldice.notation.parse_notation('4d6kh0') == RollSpec(4, 6)


def test_parse_notation_idempotent():
    first = rolldice.notation.parse_notation('2d6rr2lim1')
    second = rolldice.notation.parse_notation('2d6rr2lim1')
    assert first == second
    assert hash(first) == hash(second)


@pytest.mark.parametrize('text', ['kh1', '', '46', '4D6', '   '])
def test_parse_notation_no_dice(text):
    with pytest.raises(rolldice.exc.MalformedNotation) as exc:
        rolldice.notation.parse_notation(text)
    assert exc.value.field == 'd'


def test_parse_notation_conflicting_keep():
    with pytest.raises(rolldice.exc.ConflictingOptions) as exc:
        rolldice.notation.parse_notation('2d6kh1kl1')
    assert exc.value.kind == 'ConflictingOptions'
    assert exc.value.notation == '2d6kh1kl1'


def test_parse_notation_limit_without_reroll():
    with pytest.raises(rolldice.exc.DependentOptionMissing) as exc:
        rolldice.notation.parse_notation('2d6lim1')
    assert exc.value.field == 'lim'


def test_parse_notation_checks_in_order():
    with pytest.raises(rolldice.exc.MalformedNotation):
        rolldice.notation.parse_notation('kh1kl1')
    with pytest.raises(rolldice.exc.ConflictingOptions):
        rolldice.notation.parse_notation('2d6kh1kl1lim1')
    with pytest.raises(rolldice.exc.DependentOptionMissing):
        rolldice.notation.parse_notation('xd6lim1')


@pytest.mark.parametrize('text,field', [
    ('d6', 'count'),
    ('xd6', 'count'),
    ('-2d6', 'count'),
    ('4d', 'd'),
    ('4d6x', 'd'),
    ('4d+6', 'd'),
    ('4d6kh', 'kh'),
    ('4d6klx', 'kl'),
    ('2d6rr', 'rr'),
    ('2d6rr2lim', 'lim'),
    ('2d6rr2lim-1', 'lim'),
    ('4d6d8', 'd'),
    ('4d6kh1kh2', 'kh'),
    ('2d6rrr2', 'rr'),
    ('99999999999999999999999d', 'd'),
])
def test_parse_notation_malformed(text, field):
    with pytest.raises(rolldice.exc.MalformedNotation) as exc:
        rolldice.notation.parse_notation(text)
    assert exc.value.field == field


@pytest.mark.parametrize('text,field', [
    ('4d6kh5', 'kh'),
    ('1d20kl2', 'kl'),
    ('2d6rr7', 'rr'),
    ('2d6rr0lim3', 'lim'),
    ('0d6', 'count'),
    ('4d0', 'd'),
    ('1000000000000d6', 'count'),
    ('1001d6', 'count'),
    ('1d99999999999999999999', 'd'),
    ('1d2147483648', 'd'),
    ('1d1rr1lim1000000000000', 'lim'),
    ('1000d6rr1lim100', 'lim'),
])
def test_parse_notation_out_of_range(text, field):
    with pytest.raises(rolldice.exc.OutOfRangeOption) as exc:
        rolldice.notation.parse_notation(text)
    assert exc.value.field == field


def test_parse_field():
    assert rolldice.notation.parse_field(Token('kh', '3', 3), '4d6kh3') == 3
    with pytest.raises(rolldice.exc.MalformedNotation) as exc:
        rolldice.notation.parse_field(Token(None, '', 0), 'd6')
    assert exc.value.field == 'count'
    assert 'missing' in str(exc.value)


def test_check_ranges():
    spec = RollSpec(4, 6, keep_highest=3)
    assert rolldice.notation.check_ranges(spec) is spec

    with pytest.raises(rolldice.exc.OutOfRangeOption):
        rolldice.notation.check_ranges(RollSpec(4, 6, keep_lowest=5))


def test_check_ranges_limits():
    biggest = RollSpec(rolldice.notation.LIMIT_DIE_NUMBER, rolldice.notation.LIMIT_DIE_SIDES,
                       reroll_threshold=1, reroll_limit=99)
    assert biggest.max_draws == rolldice.notation.LIMIT_DRAWS
    assert rolldice.notation.check_ranges(biggest) is biggest

    with pytest.raises(rolldice.exc.OutOfRangeOption) as exc:
        rolldice.notation.check_ranges(biggest._replace(reroll_limit=100), '1000d2147483647rr1lim100')
    assert exc.value.field == 'lim'
    assert exc.value.notation == '1000d2147483647rr1lim100'
