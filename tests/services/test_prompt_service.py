import pytest

from prompt_garden.extensions import cache
from prompt_garden.services import prompt_service
from prompt_garden.services.prompt_service import BadRequestError, NotFoundError
from prompt_garden.sheets.layout import PROMPTS_SHEET, TAGS_SHEET


class TestPromptService:

    def test_create_prompt_appends_row_and_returns_prompt(self, app, sheet):
        prompt = prompt_service.create_prompt({
            'title': 'Outline',
            'content': 'Outline a post about [TOPIC]',
            'tags': ['a', 'b'],
            'category': 'Writing',
        })

        assert prompt.id
        assert prompt.created_at == prompt.updated_at
        assert prompt.created_at.endswith('Z')
        row = sheet.sheets[PROMPTS_SHEET][1]
        assert row == [prompt.id, 'Outline', 'Outline a post about [TOPIC]', 'a, b', 'Writing',
                       prompt.created_at, prompt.updated_at]

    def test_tags_round_trip_in_order(self, app):
        created = prompt_service.create_prompt({'content': 'x', 'tags': ['a', 'b']})
        cache.clear()
        assert prompt_service.get_prompt_by_id(created.id).tags == ['a', 'b']

    def test_comma_inside_a_tag_item_splits_it(self, app):
        created = prompt_service.create_prompt({'content': 'x', 'tags': ['a,b', 'c', ' b ']})
        assert created.tags == ['a', 'b', 'c']
        cache.clear()
        assert prompt_service.get_prompt_by_id(created.id).tags == created.tags

    def test_create_prompt_requires_content(self, app):
        with pytest.raises(BadRequestError):
            prompt_service.create_prompt({'title': 'No body'})
        with pytest.raises(BadRequestError):
            prompt_service.create_prompt({'content': '   '})

    def test_create_prompt_rejects_bad_tags(self, app):
        with pytest.raises(BadRequestError):
            prompt_service.create_prompt({'content': 'x', 'tags': [1, 2]})

    def test_comma_separated_tags_are_split_and_deduplicated(self, app):
        prompt = prompt_service.create_prompt({'content': 'x', 'tags': 'seo, blog,, seo '})
        assert prompt.tags == ['seo', 'blog']

    def test_get_prompt_by_id_not_found(self, app):
        with pytest.raises(NotFoundError):
            prompt_service.get_prompt_by_id('missing')

    def test_update_prompt_is_partial(self, app, sheet):
        created = prompt_service.create_prompt({'title': 'T', 'content': 'C', 'tags': ['x'], 'category': 'Cat'})

        updated = prompt_service.update_prompt(created.id, {'title': 'T2'})

        assert updated.title == 'T2'
        assert updated.content == 'C'
        assert updated.tags == ['x']
        assert updated.category == 'Cat'
        assert updated.created_at == created.created_at
        assert sheet.sheets[PROMPTS_SHEET][1][1] == 'T2'

    def test_update_prompt_can_clear_category(self, app):
        created = prompt_service.create_prompt({'content': 'C', 'category': 'Cat'})
        updated = prompt_service.update_prompt(created.id, {'category': None})
        assert updated.category is None
        assert prompt_service.get_prompt_by_id(created.id).category is None

    def test_update_prompt_rejects_blank_content(self, app):
        created = prompt_service.create_prompt({'content': 'C'})
        with pytest.raises(BadRequestError):
            prompt_service.update_prompt(created.id, {'content': ''})

    def test_update_prompt_not_found(self, app):
        with pytest.raises(NotFoundError):
            prompt_service.update_prompt('missing', {'title': 'x'})

    def test_update_targets_the_right_row_after_a_delete(self, app, sheet):
        first = prompt_service.create_prompt({'title': 'first', 'content': '1'})
        second = prompt_service.create_prompt({'title': 'second', 'content': '2'})
        prompt_service.delete_prompt(first.id)

        prompt_service.update_prompt(second.id, {'content': '2b'})

        rows = sheet.sheets[PROMPTS_SHEET]
        assert rows[1] == []
        assert rows[2][0] == second.id and rows[2][2] == '2b'

    def test_delete_prompt_clears_row_and_hides_it(self, app, sheet):
        created = prompt_service.create_prompt({'content': 'bye'})
        prompt_service.delete_prompt(created.id)

        assert sheet.sheets[PROMPTS_SHEET][1] == []
        assert prompt_service.get_all_prompts() == []
        with pytest.raises(NotFoundError):
            prompt_service.delete_prompt(created.id)

    def test_compact_prompts_removes_blank_rows(self, app, sheet):
        a = prompt_service.create_prompt({'content': 'a'})
        b = prompt_service.create_prompt({'content': 'b'})
        prompt_service.delete_prompt(a.id)

        assert prompt_service.compact_prompts() == 1
        rows = sheet.sheets[PROMPTS_SHEET]
        assert rows[1][0] == b.id
        assert all(not r for r in rows[2:])

    def test_mutations_recount_tags(self, app, sheet):
        p = prompt_service.create_prompt({'content': 'x', 'tags': ['ai', 'seo'], 'category': 'Writing'})
        prompt_service.create_prompt({'content': 'y', 'tags': ['ai']})

        tag_rows = [r for r in sheet.sheets[TAGS_SHEET][1:] if r]
        assert tag_rows == [['ai', '2', 'false'], ['seo', '1', 'false'], ['Writing', '1', 'true']]

        prompt_service.delete_prompt(p.id)
        tag_rows = [r for r in sheet.sheets[TAGS_SHEET][1:] if r]
        assert tag_rows == [['ai', '1', 'false']]

    def test_get_prompts_by_tag_matches_tags_and_category(self, app):
        prompt_service.create_prompt({'title': 'one', 'content': 'x', 'tags': ['Python']})
        prompt_service.create_prompt({'title': 'two', 'content': 'y', 'category': 'python'})
        prompt_service.create_prompt({'title': 'three', 'content': 'z', 'tags': ['rust']})

        titles = [p.title for p in prompt_service.get_prompts_by_tag('PYTHON')]
        assert titles == ['one', 'two']

    def test_search_prompts(self, app):
        prompt_service.create_prompt({'title': 'Cold email', 'content': 'Draft an email'})
        prompt_service.create_prompt({'title': 'Poem', 'content': 'Write a haiku about EMAIL'})
        prompt_service.create_prompt({'title': 'Other', 'content': 'Nothing here'})

        assert [p.title for p in prompt_service.search_prompts('email')] == ['Cold email', 'Poem']
        assert len(prompt_service.search_prompts('  ')) == 3

    def test_get_all_prompts_is_cached_until_mutation(self, app, sheet):
        prompt_service.create_prompt({'content': 'x'})
        prompt_service.get_all_prompts()
        reads_before = sum(1 for c in sheet.calls if c == ('get', 'Prompts!A2:G'))

        prompt_service.get_all_prompts()
        prompt_service.get_all_prompts()

        assert sum(1 for c in sheet.calls if c == ('get', 'Prompts!A2:G')) == reads_before

    def test_skips_rows_without_id(self, app, sheet):
        sheet.sheets[PROMPTS_SHEET].append(['', 'no id', 'orphan'])
        sheet.sheets[PROMPTS_SHEET].append(['abc', '', 'kept', '', '', '', ''])
        prompts = prompt_service.get_all_prompts()
        assert [p.id for p in prompts] == ['abc']
        assert prompts[0].row_number == 3

    def test_build_remix(self, app):
        created = prompt_service.create_prompt({'content': 'C', 'tags': ['t']})
        remix = prompt_service.build_remix(created.id)
        assert remix == {'title': 'Untitled Prompt (Remix)', 'content': 'C', 'tags': ['t']}
