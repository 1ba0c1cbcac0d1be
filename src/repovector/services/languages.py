import posixpath

UNKNOWN_LANGUAGE = "Unknown"

EXT_TO_LANGUAGE = {
    ".go": "Go",
    ".js": "JavaScript",
    ".jsx": "JavaScript",
    ".ts": "TypeScript",
    ".tsx": "TypeScript",
    ".py": "Python",
    ".java": "Java",
    ".c": "C/C++",
    ".cpp": "C/C++",
    ".h": "C/C++",
    ".hpp": "C/C++",
    ".rb": "Ruby",
    ".php": "PHP",
    ".cs": "C#",
    ".html": "HTML",
    ".css": "CSS",
}


def language_from_extension(ext: str) -> str:
    """Map a file extension (with leading dot) to a language label."""
    return EXT_TO_LANGUAGE.get(ext.lower(), UNKNOWN_LANGUAGE)


def language_for_path(file_path: str) -> str:
    return language_from_extension(posixpath.splitext(file_path)[1])
