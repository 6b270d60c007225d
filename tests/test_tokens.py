import pytest

from calculator_errors import UnexpectedCharacterError
from formula_tokens import Token, TokenKind, tokenize


def _kinds(text):
    return [tok.kind for tok in tokenize(text)]


def _numbers(text):
    return [tok.value for tok in tokenize(text) if tok.kind is TokenKind.NUMBER]


def test_numbers_with_decimals_and_exponents():
    assert _numbers("12 + .5 + 3.25 + 1e3 + 2.5E-2") == [12.0, 0.5, 3.25, 1000.0, 0.025]


def test_exponent_without_digits_is_left_for_identifier():
    tokens = tokenize("2e")
    assert tokens == [
        Token(TokenKind.NUMBER, 2.0),
        Token(TokenKind.MULTIPLY),
        Token(TokenKind.IDENTIFIER, "e"),
    ]


def test_exponent_sign_without_digits_is_not_consumed():
    assert _numbers("2e+1x") == [20.0]
    assert tokenize("2e+") == [
        Token(TokenKind.NUMBER, 2.0),
        Token(TokenKind.MULTIPLY),
        Token(TokenKind.IDENTIFIER, "e"),
        Token(TokenKind.ADD),
    ]


def test_identifiers_are_lowercased():
    assert tokenize("PI") == [Token(TokenKind.IDENTIFIER, "pi")]
    assert tokenize("Sqrt(4)")[0] == Token(TokenKind.IDENTIFIER, "sqrt")


def test_whitespace_and_tabs_are_skipped():
    assert _kinds(" 1 \t+\t2 ") == [TokenKind.NUMBER, TokenKind.ADD, TokenKind.NUMBER]


@pytest.mark.parametrize(
    "symbol, kind",
    [
        ("+", TokenKind.ADD),
        ("-", TokenKind.SUBTRACT),
        ("−", TokenKind.SUBTRACT),
        ("*", TokenKind.MULTIPLY),
        ("×", TokenKind.MULTIPLY),
        ("/", TokenKind.DIVIDE),
        ("÷", TokenKind.DIVIDE),
        ("^", TokenKind.POWER),
        (",", TokenKind.COMMA),
    ],
)
def test_operator_table(symbol, kind):
    assert _kinds(f"1{symbol}2") == [TokenKind.NUMBER, kind, TokenKind.NUMBER]


def test_pi_glyph_is_the_pi_constant():
    assert tokenize("π") == [Token(TokenKind.IDENTIFIER, "pi")]


@pytest.mark.parametrize("char", ["#", "=", "$", "[", "_", "²"])
def test_unexpected_character(char):
    with pytest.raises(UnexpectedCharacterError) as info:
        tokenize(f"2{char}3")
    assert info.value.char == char
    assert info.value.kind == "unexpected_character"


def test_function_call_has_no_implicit_multiplication():
    assert _kinds("sin(30)") == [
        TokenKind.IDENTIFIER,
        TokenKind.LEFT_PAREN,
        TokenKind.NUMBER,
        TokenKind.RIGHT_PAREN,
    ]


@pytest.mark.parametrize(
    "text, expected",
    [
        ("2pi", [TokenKind.NUMBER, TokenKind.MULTIPLY, TokenKind.IDENTIFIER]),
        ("2(3)", [TokenKind.NUMBER, TokenKind.MULTIPLY, TokenKind.LEFT_PAREN,
                  TokenKind.NUMBER, TokenKind.RIGHT_PAREN]),
        ("pi e", [TokenKind.IDENTIFIER, TokenKind.MULTIPLY, TokenKind.IDENTIFIER]),
        ("pi2", [TokenKind.IDENTIFIER, TokenKind.MULTIPLY, TokenKind.NUMBER]),
        ("(2)(3)", [TokenKind.LEFT_PAREN, TokenKind.NUMBER, TokenKind.RIGHT_PAREN,
                    TokenKind.MULTIPLY, TokenKind.LEFT_PAREN, TokenKind.NUMBER,
                    TokenKind.RIGHT_PAREN]),
        ("(2)3", [TokenKind.LEFT_PAREN, TokenKind.NUMBER, TokenKind.RIGHT_PAREN,
                  TokenKind.MULTIPLY, TokenKind.NUMBER]),
        ("5!2", [TokenKind.NUMBER, TokenKind.FACTORIAL, TokenKind.MULTIPLY,
                 TokenKind.NUMBER]),
        ("50%pi", [TokenKind.NUMBER, TokenKind.PERCENT, TokenKind.MULTIPLY,
                   TokenKind.IDENTIFIER]),
    ],
)
def test_implicit_multiplication(text, expected):
    assert _kinds(text) == expected


def test_constant_before_function_call_multiplies():
    assert _kinds("e sin(90)")[:3] == [
        TokenKind.IDENTIFIER,
        TokenKind.MULTIPLY,
        TokenKind.IDENTIFIER,
    ]


def test_adjacent_numbers_are_not_joined():
    assert _kinds("1.2.3") == [TokenKind.NUMBER, TokenKind.NUMBER]
