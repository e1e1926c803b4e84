"""Unit tests for the individual extraction tactics.

Each tactic is exercised on its own, before strategy-level acceptance, so
these tests check what a tactic *proposes*, in order.
"""

from __future__ import annotations

import json

import pytest

from mintscope.models.chain import ChainFamily
from mintscope.models.resolution import SiteContext
from mintscope.resolution.tactics import (
    copy_controls,
    data_attributes,
    embedded_pair,
    explorer_address_segment,
    explorer_links,
    find_pair,
    launch_path,
    pick_pair_member,
)

CRM_MINT = "Eme5T2s2HB7B8W4YgLG1eReQpnadEVUnQBRjaKTdBAGS"
BONK_MINT = "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263"
WSOL = "So11111111111111111111111111111111111111112"
USDC_SOL = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
EVM_TOKEN = "0x532f27101965dd16442E59d40670FaF5eBB142E4"
WETH_BASE = "0x4200000000000000000000000000000000000006"

DEX_URL = "https://dexscreener.com/solana/6pnitzwjumnzsvfyfejf9mijzpc4iuqh1xugfwvdf8wb"


def _ctx(document, url: str = DEX_URL) -> SiteContext:
    return SiteContext(hostname="dexscreener.com", url=url, document=document)


def _next_data(payload) -> str:
    body = payload if isinstance(payload, str) else json.dumps(payload)
    return f'<script id="__NEXT_DATA__" type="application/json">{body}</script>'


# ---------------------------------------------------------------------------
# Explorer links
# ---------------------------------------------------------------------------


class TestExplorerAddressSegment:
    """Parsing explorer hrefs."""

    @pytest.mark.parametrize(
        "href",
        [
            f"https://solscan.io/token/{CRM_MINT}",
            f"https://solscan.io/account/{CRM_MINT}",
            f"https://explorer.solana.com/address/{CRM_MINT}",
            f"https://solana.fm/address/{CRM_MINT}",
            f"https://solscan.io/token/{CRM_MINT}?cluster=mainnet",
            f"https://solscan.io/token/{CRM_MINT}/holders",
            f"https://www.solscan.io/token/{CRM_MINT}#top",
            f"//solscan.io/token/{CRM_MINT}",
        ],
    )
    def test_solana_explorers(self, href: str) -> None:
        assert explorer_address_segment(href) == CRM_MINT

    @pytest.mark.parametrize(
        "href",
        [
            f"https://etherscan.io/token/{EVM_TOKEN}",
            f"https://basescan.org/address/{EVM_TOKEN}",
            f"https://bscscan.com/token/{EVM_TOKEN}",
            f"https://optimistic.etherscan.io/token/{EVM_TOKEN}",
            f"https://arbiscan.io/token/{EVM_TOKEN}",
        ],
    )
    def test_evm_explorers(self, href: str) -> None:
        assert explorer_address_segment(href) == EVM_TOKEN

    @pytest.mark.parametrize(
        "href",
        [
            None,
            "",
            "/solana/abc",
            f"https://example.com/token/{CRM_MINT}",
            f"https://notsolscan.io/token/{CRM_MINT}",
            f"https://solscan.io/tx/{CRM_MINT}",
            "https://solscan.io/token/",
            "http://[::1/token/x",
        ],
    )
    def test_non_explorer_links(self, href) -> None:
        assert explorer_address_segment(href) is None


class TestExplorerLinks:
    """Explorer anchors in document order."""

    def test_document_order(self, make_doc) -> None:
        doc = make_doc(
            f'<a href="https://solscan.io/token/{WSOL}">SOL</a>'
            f'<a href="https://twitter.com/someone">tw</a>'
            f'<a href="https://solscan.io/token/{CRM_MINT}">CRM</a>'
        )
        assert list(explorer_links(_ctx(doc), ChainFamily.SOLANA)) == [WSOL, CRM_MINT]

    def test_no_links(self, make_doc) -> None:
        assert list(explorer_links(_ctx(make_doc("<p>nothing</p>")), ChainFamily.SOLANA)) == []


# ---------------------------------------------------------------------------
# Embedded data blob
# ---------------------------------------------------------------------------


def _pair(base: str | None, quote: str | None) -> dict:
    pair: dict = {}
    if base is not None:
        pair["baseToken"] = {"address": base, "symbol": "BASE"}
    if quote is not None:
        pair["quoteToken"] = {"address": quote, "symbol": "QUOTE"}
    return pair


class TestPickPairMember:
    """Choosing the target side of a pair."""

    def test_quote_when_base_excluded(self) -> None:
        assert pick_pair_member(_pair(WSOL, CRM_MINT), ChainFamily.SOLANA) == CRM_MINT

    def test_base_when_quote_excluded(self) -> None:
        assert pick_pair_member(_pair(CRM_MINT, USDC_SOL), ChainFamily.SOLANA) == CRM_MINT

    def test_both_non_excluded_is_ambiguous(self) -> None:
        assert pick_pair_member(_pair(CRM_MINT, BONK_MINT), ChainFamily.SOLANA) is None

    def test_both_excluded_yields_nothing(self) -> None:
        assert pick_pair_member(_pair(WSOL, USDC_SOL), ChainFamily.SOLANA) is None

    def test_invalid_member_does_not_qualify(self) -> None:
        assert pick_pair_member(_pair("not-an-address", CRM_MINT), ChainFamily.SOLANA) == CRM_MINT

    def test_single_member(self) -> None:
        assert pick_pair_member(_pair(CRM_MINT, None), ChainFamily.SOLANA) == CRM_MINT

    def test_evm_family(self) -> None:
        assert pick_pair_member(_pair(EVM_TOKEN, WETH_BASE), ChainFamily.EVM) == EVM_TOKEN

    def test_non_dict_tokens_ignored(self) -> None:
        assert pick_pair_member({"baseToken": CRM_MINT, "quoteToken": [1, 2]}, ChainFamily.SOLANA) is None


class TestFindPair:
    """Known nested paths inside the payload."""

    def test_single_pair_path(self) -> None:
        data = {"props": {"pageProps": {"pair": _pair(WSOL, CRM_MINT)}}}
        assert find_pair(data) == _pair(WSOL, CRM_MINT)

    def test_pairs_list_path(self) -> None:
        data = {"props": {"pageProps": {"pairs": [_pair(CRM_MINT, WSOL), _pair(BONK_MINT, WSOL)]}}}
        assert find_pair(data) == _pair(CRM_MINT, WSOL)

    def test_pair_preferred_over_pairs(self) -> None:
        data = {"props": {"pageProps": {"pair": _pair(BONK_MINT, WSOL), "pairs": [_pair(CRM_MINT, WSOL)]}}}
        assert find_pair(data) == _pair(BONK_MINT, WSOL)

    @pytest.mark.parametrize(
        "data",
        [
            None,
            [],
            "string",
            {"props": None},
            {"props": {"pageProps": {"pairs": []}}},
            {"props": {"pageProps": {"pairs": "nope"}}},
            {"props": {"pageProps": {"pair": ["not", "a", "dict"]}}},
        ],
    )
    def test_unexpected_shapes(self, data) -> None:
        assert find_pair(data) is None


class TestEmbeddedPair:
    """Reading the __NEXT_DATA__ element."""

    def test_yields_target(self, make_doc) -> None:
        doc = make_doc(_next_data({"props": {"pageProps": {"pair": _pair(WSOL, CRM_MINT)}}}))
        assert list(embedded_pair(_ctx(doc), ChainFamily.SOLANA)) == [CRM_MINT]

    def test_malformed_json_yields_nothing(self, make_doc) -> None:
        doc = make_doc(_next_data('{"props": {"pageProps": '))
        assert list(embedded_pair(_ctx(doc), ChainFamily.SOLANA)) == []

    def test_empty_element_yields_nothing(self, make_doc) -> None:
        doc = make_doc('<script id="__NEXT_DATA__"></script>')
        assert list(embedded_pair(_ctx(doc), ChainFamily.SOLANA)) == []

    def test_missing_element_yields_nothing(self, make_doc) -> None:
        assert list(embedded_pair(_ctx(make_doc("<div></div>")), ChainFamily.SOLANA)) == []

    def test_ambiguous_pair_yields_nothing(self, make_doc) -> None:
        doc = make_doc(_next_data({"props": {"pageProps": {"pair": _pair(CRM_MINT, BONK_MINT)}}}))
        assert list(embedded_pair(_ctx(doc), ChainFamily.SOLANA)) == []


# ---------------------------------------------------------------------------
# Data attributes
# ---------------------------------------------------------------------------


class TestDataAttributes:
    """Marker attributes, element by element."""

    def test_all_marker_attributes(self, make_doc) -> None:
        doc = make_doc(
            f'<span data-address="{WSOL}"></span>'
            f'<span data-token-address="{CRM_MINT}"></span>'
            f'<span data-mint="{BONK_MINT}"></span>'
        )
        assert list(data_attributes(_ctx(doc), ChainFamily.SOLANA)) == [WSOL, CRM_MINT, BONK_MINT]

    def test_multiple_attributes_on_one_element(self, make_doc) -> None:
        doc = make_doc(f'<div data-address="short" data-mint="{CRM_MINT}"></div>')
        assert list(data_attributes(_ctx(doc), ChainFamily.SOLANA)) == ["short", CRM_MINT]

    def test_empty_values_skipped(self, make_doc) -> None:
        doc = make_doc('<div data-address=""></div>')
        assert list(data_attributes(_ctx(doc), ChainFamily.SOLANA)) == []


# ---------------------------------------------------------------------------
# Copy controls
# ---------------------------------------------------------------------------


class TestCopyControls:
    """Clipboard affordances propose their trimmed full text."""

    def test_trimmed_text(self, make_doc) -> None:
        doc = make_doc(f'<button class="btn-copy">\n  {CRM_MINT}  \n</button>')
        assert list(copy_controls(_ctx(doc), ChainFamily.SOLANA)) == [CRM_MINT]

    def test_matches_each_selector(self, make_doc) -> None:
        doc = make_doc(
            '<button class="copy-btn">a</button>'
            '<span data-clipboard="x">b</span>'
            '<div class="token-address">c</div>'
            '<button class="plain">d</button>'
        )
        assert list(copy_controls(_ctx(doc), ChainFamily.SOLANA)) == ["a", "b", "c"]

    def test_nested_text_is_concatenated(self, make_doc) -> None:
        doc = make_doc(f'<button class="copy"><span>CA:</span> <span>{CRM_MINT}</span></button>')
        assert list(copy_controls(_ctx(doc), ChainFamily.SOLANA)) == [f"CA: {CRM_MINT}"]


# ---------------------------------------------------------------------------
# Launch path
# ---------------------------------------------------------------------------


class TestLaunchPath:
    """Launch-platform URL paths."""

    @pytest.mark.parametrize(
        "url",
        [
            f"https://pump.fun/coin/{CRM_MINT}",
            f"https://pump.fun/{CRM_MINT}",
            f"https://pump.fun/coin/{CRM_MINT}?include-nsfw=true",
            f"https://pump.fun/coin/{CRM_MINT}/trades",
        ],
    )
    def test_extracts_segment(self, url: str) -> None:
        ctx = SiteContext(hostname="pump.fun", url=url)
        assert list(launch_path(ctx, ChainFamily.SOLANA)) == [CRM_MINT]

    def test_bare_coin_segment(self) -> None:
        ctx = SiteContext(hostname="pump.fun", url="https://pump.fun/coin")
        assert list(launch_path(ctx, ChainFamily.SOLANA)) == ["coin"]

    def test_root_path(self) -> None:
        ctx = SiteContext(hostname="pump.fun", url="https://pump.fun/")
        assert list(launch_path(ctx, ChainFamily.SOLANA)) == []
