"""
Tests for response parsing and section replacement.
"""

import pytest
from bs4 import BeautifulSoup

from amp_access.errors import ParseError
from amp_access.sections import (
    collect_sections,
    extract_result,
    plan_replacements,
    replace_sections,
)


def parse(html):
    return BeautifulSoup(html, "html.parser")


LIVE_HTML = """
<html><body>
  <div class="gate" i-amp-access-id="1/1">old1</div>
  <div class="gate" i-amp-access-id="1/2">old2</div>
</body></html>
"""

RESPONSE_HTML = """
<div>
  <script type="application/json" id="amp-access-data">{"access": "A"}</script>
  <div i-amp-access-id="1/1">a1</div>
  <div i-amp-access-id="1/2">a2</div>
  <div i-amp-access-id="a3">a3</div>
</div>
"""


class TestExtractResult:
    """Test extraction of authorization data."""

    def test_extract(self):
        """Test reading the embedded JSON"""
        assert extract_result(parse(RESPONSE_HTML)) == {'access': 'A'}

    def test_missing_element(self):
        """Test that a response without data fails"""
        with pytest.raises(ParseError, match="No authorization data"):
            extract_result(parse('<div i-amp-access-id="1/1">a1</div>'))

    def test_malformed_json(self):
        """Test that malformed data fails"""
        document = parse('<script id="amp-access-data">{"access": </script>')
        with pytest.raises(ParseError, match="Malformed") as exc_info:
            extract_result(document)
        assert exc_info.value.cause is not None

    def test_empty_element(self):
        """Test that an empty data element fails"""
        with pytest.raises(ParseError):
            extract_result(parse('<script id="amp-access-data"></script>'))

    def test_non_object_json(self):
        """Test that JSON which is not an object fails"""
        with pytest.raises(ParseError, match="JSON object"):
            extract_result(parse('<script id="amp-access-data">[1, 2]</script>'))


class TestPlanReplacements:
    """Test the pure id matching."""

    def test_restricted_to_live_ids(self):
        """Test that only ids present in the page are planned"""
        plan = plan_replacements(['1/1', '1/2', '2/1'], {'1/1': 'a1', '1/2': 'a2', 'a3': 'a3'})
        assert plan == {'1/1': 'a1', '1/2': 'a2'}

    def test_empty(self):
        """Test matching with no response sections"""
        assert plan_replacements(['1/1'], {}) == {}

    def test_first_response_section_wins(self):
        """Test that duplicate response ids keep the first element"""
        sections = collect_sections(parse(
            '<div i-amp-access-id="1/1">first</div><div i-amp-access-id="1/1">second</div>'
        ))
        assert sections['1/1'].get_text() == 'first'


class TestReplaceSections:
    """Test splicing response sections into the live page."""

    @pytest.mark.asyncio
    async def test_replace_sections(self):
        """Test replacement of matching sections"""
        live = parse(LIVE_HTML)
        replaced = await replace_sections(live, parse(RESPONSE_HTML))

        assert replaced == ['1/1', '1/2']
        assert live.find(attrs={'i-amp-access-id': '1/1'}).get_text() == 'a1'
        assert live.find(attrs={'i-amp-access-id': '1/2'}).get_text() == 'a2'
        assert live.find(attrs={'i-amp-access-id': 'a3'}) is None

    @pytest.mark.asyncio
    async def test_live_elements_are_kept(self):
        """Test that live elements keep their identity and attributes"""
        live = parse(LIVE_HTML)
        element = live.find(attrs={'i-amp-access-id': '1/1'})

        await replace_sections(live, parse(RESPONSE_HTML))

        assert live.find(attrs={'i-amp-access-id': '1/1'}) is element
        assert element['class'] == ['gate']
        assert element.get_text() == 'a1'

    @pytest.mark.asyncio
    async def test_markup_is_copied(self):
        """Test that nested markup is copied and the response left intact"""
        live = parse('<div i-amp-access-id="1/1">old</div>')
        response = parse('<section i-amp-access-id="1/1"><b>bold</b> text</section>')

        await replace_sections(live, response)

        target = live.find(attrs={'i-amp-access-id': '1/1'})
        assert target.name == 'div'
        assert target.b.get_text() == 'bold'
        assert target.get_text() == 'bold text'
        assert response.find(attrs={'i-amp-access-id': '1/1'}).get_text() == 'bold text'

    @pytest.mark.asyncio
    async def test_unmatched_live_section_untouched(self):
        """Test that live sections missing from the response stay as they are"""
        live = parse(LIVE_HTML)
        response = parse('<div i-amp-access-id="1/2">a2</div>')

        replaced = await replace_sections(live, response)

        assert replaced == ['1/2']
        assert live.find(attrs={'i-amp-access-id': '1/1'}).get_text() == 'old1'
        assert live.find(attrs={'i-amp-access-id': '1/2'}).get_text() == 'a2'

    @pytest.mark.asyncio
    async def test_idempotent(self):
        """Test that applying the same response twice gives the same page"""
        live = parse(LIVE_HTML)
        response = parse(RESPONSE_HTML)

        await replace_sections(live, response)
        once = str(live)
        await replace_sections(live, response)

        assert str(live) == once
