from brainrot.lexer import tokenize, KEYWORD, IDENTIFIER, NUMBER, STRING, OPERATOR, DELIMITER, END


def kinds_and_texts(source):
    return [(t.kind, t.text) for t in tokenize(source)]


def test_variable_declaration_tokens():
    assert kinds_and_texts('mold x = 42;') == [
        (KEYWORD, 'mold'),
        (IDENTIFIER, 'x'),
        (OPERATOR, 'ASSIGN'),
        (NUMBER, '42'),
        (DELIMITER, 'SEMICOLON'),
        (END, ''),
    ]


def test_empty_source_is_just_end():
    tokens = tokenize('')
    assert len(tokens) == 1
    assert tokens[0].kind == END
    assert (tokens[0].line, tokens[0].column) == (1, 1)


def test_keywords_are_case_insensitive():
    assert kinds_and_texts('MOLD Foo ElSeD') == [
        (KEYWORD, 'mold'),
        (IDENTIFIER, 'Foo'),
        (KEYWORD, 'elsed'),
        (END, ''),
    ]


def test_compound_operators_win_over_single_characters():
    assert kinds_and_texts('a == b != !c = d') == [
        (IDENTIFIER, 'a'),
        (OPERATOR, 'EQ'),
        (IDENTIFIER, 'b'),
        (OPERATOR, 'NEQ'),
        (OPERATOR, 'NOT'),
        (IDENTIFIER, 'c'),
        (OPERATOR, 'ASSIGN'),
        (IDENTIFIER, 'd'),
        (END, ''),
    ]


def test_minus_is_never_part_of_a_number():
    assert kinds_and_texts('-5') == [(OPERATOR, 'MINUS'), (NUMBER, '5'), (END, '')]


def test_number_takes_at_most_one_decimal_point():
    assert kinds_and_texts('3.14.5') == [(NUMBER, '3.14'), (NUMBER, '5'), (END, '')]


def test_strings_decode_escapes_in_both_quote_styles():
    tokens = tokenize('"a\\tb\\n" \'it\\\'s\'')
    assert tokens[0].kind == STRING
    assert tokens[0].text == 'a\tb\n'
    assert tokens[1].kind == STRING
    assert tokens[1].text == "it's"


def test_unterminated_string_runs_to_end_of_input():
    assert kinds_and_texts('rott "abc') == [(KEYWORD, 'rott'), (STRING, 'abc'), (END, '')]


def test_comments_are_skipped_to_end_of_line():
    tokens = tokenize('#rot a comment rott 1;\nrott 2;')
    assert [t.text for t in tokens] == ['rott', '2', 'SEMICOLON', '']
    assert (tokens[0].line, tokens[0].column) == (2, 1)


def test_unknown_characters_are_dropped():
    assert kinds_and_texts('@ $ # 1 ~') == [(NUMBER, '1'), (END, '')]


def test_positions_are_one_based():
    tokens = tokenize('rott x;\n  mold y = 1;')
    positions = [(t.text, t.line, t.column) for t in tokens]
    assert positions[0] == ('rott', 1, 1)
    assert positions[1] == ('x', 1, 6)
    assert positions[3] == ('mold', 2, 3)
    assert positions[-1] == ('', 2, 14)
