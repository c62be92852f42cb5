from story_weaver.core.export import format_story, story_basename, story_filename
from story_weaver.core.graph.state import GeneratedChapter


def test_format_story_joins_chapters_with_rule():
    chapters = [
        GeneratedChapter(chapter_number=1, content="A"),
        GeneratedChapter(chapter_number=2, content="B"),
    ]
    assert format_story(chapters) == "## Chapter 1\n\nA\n\n---\n\n## Chapter 2\n\nB"


def test_format_story_localized_heading():
    chapters = [GeneratedChapter(chapter_number=1, content="A")]
    assert format_story(chapters, heading="Capítulo") == "## Capítulo 1\n\nA"


def test_format_story_empty():
    assert format_story([]) == ""


class TestStoryBasename:

    def test_first_token_lowercased_and_stripped(self):
        assert story_basename("Mystery noir, 1940s") == "mystery"

    def test_punctuation_inside_token_is_removed(self):
        assert story_basename("Sci-Fi space opera") == "scifi"

    def test_only_punctuation_falls_back(self):
        assert story_basename("!!! ...") == "story"

    def test_empty_style_falls_back(self):
        assert story_basename("") == "story"
        assert story_basename("   ") == "story"

    def test_non_ascii_letters_are_stripped(self):
        assert story_basename("Mistério noir", default="historia") == "mistrio"
        assert story_basename("¿¡", default="historia") == "historia"


def test_story_filename_has_markdown_extension():
    assert story_filename("Mystery noir, 1940s") == "mystery.md"
    assert story_filename("***") == "story.md"
