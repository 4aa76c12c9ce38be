"""Parser for the Monkey language.

Statements are parsed by recursive descent and expressions by precedence
climbing (Pratt parsing). Every token kind that can start an expression has
a prefix rule, and every token kind that can continue one has a binding
power and an infix rule. `parse_expression(precedence)` runs the prefix rule
for the current token, then keeps folding the expression built so far into
the infix rule of the next token for as long as that token binds tighter
than `precedence`.

The parser never raises on malformed input. A failed rule records one
message in `Parser.errors` and returns None. The statement holding it is
dropped and parsing resumes at the next statement. When a failure is caused
by running out of input the program is flagged as incomplete, which is how a
line-oriented front end tells "needs another line" apart from a real syntax
error.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Callable, Dict, List, Optional, Tuple

from .ast import (
    Program, LetStmt, ReturnStmt, ExprStmt, Block,
    Ident, IntegerLit, StringLit, BooleanLit, PrefixOp, InfixOp,
    IfExpr, FunctionLit, Call, ArrayLit, Index, HashLit, Node,
)
from .lexer import Lexer
from .token import Token, TokenKind
from .types import I64_MAX


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2       # == !=
    LESSGREATER = 3  # < >
    SUM = 4          # + -
    PRODUCT = 5      # * /
    PREFIX = 6       # -x !x
    CALL = 7         # f(x)
    INDEX = 8        # a[i]


PRECEDENCES: Dict[TokenKind, Precedence] = {
    TokenKind.EQ: Precedence.EQUALS,
    TokenKind.NOT_EQ: Precedence.EQUALS,
    TokenKind.LT: Precedence.LESSGREATER,
    TokenKind.GT: Precedence.LESSGREATER,
    TokenKind.PLUS: Precedence.SUM,
    TokenKind.MINUS: Precedence.SUM,
    TokenKind.SLASH: Precedence.PRODUCT,
    TokenKind.ASTERISK: Precedence.PRODUCT,
    TokenKind.LPAREN: Precedence.CALL,
    TokenKind.LBRACKET: Precedence.INDEX,
}


PrefixRule = Callable[[], Optional[Node]]
InfixRule = Callable[[Node], Optional[Node]]


class Parser:
    def __init__(self, lexer: Lexer):
        self.lexer = lexer
        self.errors: List[str] = []
        self.incomplete = False
        # the last `}` consumed by parse_block
        self.closed_brace: Optional[Token] = None

        self.cur_token = Token(TokenKind.ILLEGAL, '')
        self.peek_token = Token(TokenKind.ILLEGAL, '')

        self.prefix_rules: Dict[TokenKind, PrefixRule] = {
            TokenKind.IDENT: self.parse_identifier,
            TokenKind.INT: self.parse_integer_literal,
            TokenKind.STRING: self.parse_string_literal,
            TokenKind.TRUE: self.parse_boolean,
            TokenKind.FALSE: self.parse_boolean,
            TokenKind.BANG: self.parse_prefix_expression,
            TokenKind.MINUS: self.parse_prefix_expression,
            TokenKind.LPAREN: self.parse_grouped_expression,
            TokenKind.IF: self.parse_if_expression,
            TokenKind.FUNCTION: self.parse_function_literal,
            TokenKind.LBRACKET: self.parse_array_literal,
            TokenKind.LBRACE: self.parse_hash_literal,
        }
        self.infix_rules: Dict[TokenKind, InfixRule] = {
            TokenKind.PLUS: self.parse_infix_expression,
            TokenKind.MINUS: self.parse_infix_expression,
            TokenKind.SLASH: self.parse_infix_expression,
            TokenKind.ASTERISK: self.parse_infix_expression,
            TokenKind.EQ: self.parse_infix_expression,
            TokenKind.NOT_EQ: self.parse_infix_expression,
            TokenKind.LT: self.parse_infix_expression,
            TokenKind.GT: self.parse_infix_expression,
            TokenKind.LPAREN: self.parse_call_expression,
            TokenKind.LBRACKET: self.parse_index_expression,
        }

        # fill cur_token and peek_token
        self.advance()
        self.advance()

    # Token handling

    def advance(self) -> None:
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def cur_token_is(self, kind: TokenKind) -> bool:
        return self.cur_token.kind is kind

    def peek_token_is(self, kind: TokenKind) -> bool:
        return self.peek_token.kind is kind

    def expect_peek(self, kind: TokenKind) -> bool:
        """Advance if the lookahead is `kind`, otherwise record an error."""
        if self.peek_token_is(kind):
            self.advance()
            return True
        self.peek_error(kind)
        return False

    def peek_error(self, kind: TokenKind) -> None:
        if self.peek_token_is(TokenKind.EOF):
            self.incomplete = True
        self.errors.append(
            f"expected next token to be {kind}, got {self.peek_token.kind} instead")

    def no_prefix_rule_error(self, kind: TokenKind) -> None:
        if kind is TokenKind.EOF:
            self.incomplete = True
        self.errors.append(f"no prefix parse function for {kind} found")

    def peek_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.peek_token.kind, Precedence.LOWEST)

    def cur_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.cur_token.kind, Precedence.LOWEST)

    def synchronize(self) -> None:
        """Skip the rest of a failed top-level statement.

        Stops on a semicolon (consumed as the statement's terminator) or EOF.
        """
        while not self.cur_token_is(TokenKind.EOF):
            if self.cur_token_is(TokenKind.SEMICOLON):
                return
            self.advance()

    def skip_statement_in_block(self) -> bool:
        """Skip the rest of a failed statement inside a block.

        Returns True when stopped on the closing brace of the block being
        parsed, False on a semicolon or EOF. Braces of nested blocks are
        skipped in pairs.
        """
        if self.cur_token_is(TokenKind.RBRACE) and self.cur_token is not self.closed_brace:
            return True
        depth = 0
        while not self.cur_token_is(TokenKind.EOF):
            if depth == 0 and self.cur_token_is(TokenKind.SEMICOLON):
                return False
            if self.peek_token_is(TokenKind.LBRACE):
                depth += 1
            elif self.peek_token_is(TokenKind.RBRACE):
                if depth == 0:
                    self.advance()
                    return True
                depth -= 1
            self.advance()
        return False

    # Statements

    def parse_program(self) -> Program:
        statements: List[Node] = []
        while not self.cur_token_is(TokenKind.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            else:
                self.synchronize()
            self.advance()
        return Program(statements, incomplete=self.incomplete)

    def parse_statement(self) -> Optional[Node]:
        if self.cur_token_is(TokenKind.LET):
            return self.parse_let_statement()
        if self.cur_token_is(TokenKind.RETURN):
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self) -> Optional[LetStmt]:
        if not self.expect_peek(TokenKind.IDENT):
            return None
        name = Ident(self.cur_token.literal)
        if not self.expect_peek(TokenKind.ASSIGN):
            return None
        self.advance()
        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None
        if self.peek_token_is(TokenKind.SEMICOLON):
            self.advance()
        return LetStmt(name, value)

    def parse_return_statement(self) -> Optional[ReturnStmt]:
        self.advance()
        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None
        if self.peek_token_is(TokenKind.SEMICOLON):
            self.advance()
        return ReturnStmt(value)

    def parse_expression_statement(self) -> Optional[ExprStmt]:
        expr = self.parse_expression(Precedence.LOWEST)
        if expr is None:
            return None
        if self.peek_token_is(TokenKind.SEMICOLON):
            self.advance()
        return ExprStmt(expr)

    def parse_block(self) -> Optional[Block]:
        # cur_token is '{'; a block with a failed statement is dropped whole
        statements: List[Node] = []
        failed = False
        self.advance()
        while not self.cur_token_is(TokenKind.RBRACE):
            if self.cur_token_is(TokenKind.EOF):
                self.incomplete = True
                self.errors.append(
                    f"expected next token to be {TokenKind.RBRACE}, got {TokenKind.EOF} instead")
                return None
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            else:
                failed = True
                if self.skip_statement_in_block():
                    break
            self.advance()
        self.closed_brace = self.cur_token
        if failed:
            return None
        return Block(statements)

    # Expressions

    def parse_expression(self, precedence: Precedence) -> Optional[Node]:
        prefix = self.prefix_rules.get(self.cur_token.kind)
        if prefix is None:
            self.no_prefix_rule_error(self.cur_token.kind)
            return None
        left = prefix()
        if left is None:
            return None

        while not self.peek_token_is(TokenKind.SEMICOLON) and precedence < self.peek_precedence():
            infix = self.infix_rules.get(self.peek_token.kind)
            if infix is None:
                return left
            self.advance()
            left = infix(left)
            if left is None:
                return None
        return left

    def parse_identifier(self) -> Node:
        return Ident(self.cur_token.literal)

    def parse_integer_literal(self) -> Optional[Node]:
        literal = self.cur_token.literal
        value = int(literal)
        if value > I64_MAX:
            self.errors.append(f"could not parse {literal} as integer")
            return None
        return IntegerLit(value)

    def parse_string_literal(self) -> Node:
        return StringLit(self.cur_token.literal)

    def parse_boolean(self) -> Node:
        return BooleanLit(self.cur_token_is(TokenKind.TRUE))

    def parse_prefix_expression(self) -> Optional[Node]:
        op = self.cur_token.literal
        self.advance()
        operand = self.parse_expression(Precedence.PREFIX)
        if operand is None:
            return None
        return PrefixOp(op, operand)

    def parse_infix_expression(self, left: Node) -> Optional[Node]:
        op = self.cur_token.literal
        precedence = self.cur_precedence()
        self.advance()
        right = self.parse_expression(precedence)
        if right is None:
            return None
        return InfixOp(op, left, right)

    def parse_grouped_expression(self) -> Optional[Node]:
        self.advance()
        expr = self.parse_expression(Precedence.LOWEST)
        if expr is None:
            return None
        if not self.expect_peek(TokenKind.RPAREN):
            return None
        return expr

    def parse_if_expression(self) -> Optional[Node]:
        if not self.expect_peek(TokenKind.LPAREN):
            return None
        self.advance()
        condition = self.parse_expression(Precedence.LOWEST)
        if condition is None:
            return None
        if not self.expect_peek(TokenKind.RPAREN):
            return None
        if not self.expect_peek(TokenKind.LBRACE):
            return None
        consequence = self.parse_block()
        if consequence is None:
            return None

        alternative = None
        if self.peek_token_is(TokenKind.ELSE):
            self.advance()
            if not self.expect_peek(TokenKind.LBRACE):
                return None
            alternative = self.parse_block()
            if alternative is None:
                return None
        return IfExpr(condition, consequence, alternative)

    def parse_function_literal(self) -> Optional[Node]:
        if not self.expect_peek(TokenKind.LPAREN):
            return None
        params = self.parse_function_parameters()
        if params is None:
            return None
        if not self.expect_peek(TokenKind.LBRACE):
            return None
        body = self.parse_block()
        if body is None:
            return None
        return FunctionLit(params, body)

    def parse_function_parameters(self) -> Optional[List[Ident]]:
        params: List[Ident] = []
        if self.peek_token_is(TokenKind.RPAREN):
            self.advance()
            return params

        if not self.expect_peek(TokenKind.IDENT):
            return None
        params.append(Ident(self.cur_token.literal))
        while self.peek_token_is(TokenKind.COMMA):
            self.advance()
            if not self.expect_peek(TokenKind.IDENT):
                return None
            params.append(Ident(self.cur_token.literal))

        if not self.expect_peek(TokenKind.RPAREN):
            return None
        return params

    def parse_call_expression(self, callee: Node) -> Optional[Node]:
        args = self.parse_expression_list(TokenKind.RPAREN)
        if args is None:
            return None
        return Call(callee, args)

    def parse_array_literal(self) -> Optional[Node]:
        elements = self.parse_expression_list(TokenKind.RBRACKET)
        if elements is None:
            return None
        return ArrayLit(elements)

    def parse_expression_list(self, end: TokenKind) -> Optional[List[Node]]:
        """Parse comma separated expressions up to the closing `end` token."""
        items: List[Node] = []
        if self.peek_token_is(end):
            self.advance()
            return items

        self.advance()
        item = self.parse_expression(Precedence.LOWEST)
        if item is None:
            return None
        items.append(item)
        while self.peek_token_is(TokenKind.COMMA):
            self.advance()
            self.advance()
            item = self.parse_expression(Precedence.LOWEST)
            if item is None:
                return None
            items.append(item)

        if not self.expect_peek(end):
            return None
        return items

    def parse_index_expression(self, target: Node) -> Optional[Node]:
        self.advance()
        index = self.parse_expression(Precedence.LOWEST)
        if index is None:
            return None
        if not self.expect_peek(TokenKind.RBRACKET):
            return None
        return Index(target, index)

    def parse_hash_literal(self) -> Optional[Node]:
        pairs: List[Tuple[Node, Node]] = []
        while not self.peek_token_is(TokenKind.RBRACE):
            self.advance()
            key = self.parse_expression(Precedence.LOWEST)
            if key is None:
                return None
            if not self.expect_peek(TokenKind.COLON):
                return None
            self.advance()
            value = self.parse_expression(Precedence.LOWEST)
            if value is None:
                return None
            pairs.append((key, value))
            if not self.peek_token_is(TokenKind.RBRACE) and not self.expect_peek(TokenKind.COMMA):
                return None
        if not self.expect_peek(TokenKind.RBRACE):
            return None
        return HashLit(pairs)


def parse_program(source: str) -> Tuple[Program, List[str]]:
    """Parse Monkey source code into a Program and its syntax errors.

    A non-empty error list means the program must not be evaluated.
    """
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    return program, parser.errors
