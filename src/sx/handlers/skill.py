from sx.handlers.base import DirectoryAssetHandler


class SkillHandler(DirectoryAssetHandler):
    """Skills keep their whole archive: SKILL.md plus any supporting files."""

    directory = "skills"
