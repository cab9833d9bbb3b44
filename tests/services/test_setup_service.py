from prompt_garden.services import setup_service
from prompt_garden.sheets.layout import CATEGORIES_SHEET, PROMPTS_SHEET, TAGS_SHEET


class TestSetupService:

    def test_creates_missing_sheets_with_headers(self, app, sheet):
        sheet.sheets.clear()

        result = setup_service.initialize_sheets()

        assert result['created'] == [PROMPTS_SHEET, TAGS_SHEET, CATEGORIES_SHEET]
        assert result['existing'] == []
        assert sheet.sheets[PROMPTS_SHEET] == [
            ['ID', 'Title', 'Content', 'Tags', 'Category', 'Created At', 'Updated At']
        ]
        assert sheet.sheets[TAGS_SHEET] == [['Name', 'Count', 'Is Category']]
        assert sheet.sheets[CATEGORIES_SHEET] == [['Name', 'Description']]

    def test_is_idempotent(self, app, sheet):
        before = {k: [list(r) for r in v] for k, v in sheet.sheets.items()}

        result = setup_service.initialize_sheets()

        assert result['created'] == []
        assert result['headers'] == []
        assert sheet.sheets == before
        assert not any(c[0] in ('add_sheet', 'update') for c in sheet.calls)

    def test_writes_header_into_existing_empty_sheet(self, app, sheet):
        sheet.sheets[TAGS_SHEET] = []

        result = setup_service.initialize_sheets()

        assert result['created'] == []
        assert result['headers'] == [TAGS_SHEET]
        assert sheet.sheets[TAGS_SHEET] == [['Name', 'Count', 'Is Category']]
