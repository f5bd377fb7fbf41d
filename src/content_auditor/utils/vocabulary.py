# src/content_auditor/utils/vocabulary.py
import functools

TECHNICAL_WORDS_JS = {
    "function", "return", "const", "var", "let", "this", "true", "false", "null", "undefined", "typeof",
    "instanceof", "new", "class", "extends", "import", "export", "default", "async", "await", "yield",
    "break", "continue", "switch", "case", "throw", "catch", "finally", "else", "while", "void", "delete",
    "static", "super", "constructor", "prototype", "promise", "then", "json", "parse", "stringify",
}

TECHNICAL_WORDS_DOM = {
    "window", "document", "console", "log", "getelementbyid", "queryselector", "queryselectorall",
    "addeventlistener", "removeeventlistener", "createelement", "appendchild", "innerhtml", "textcontent",
    "classlist", "setattribute", "getattribute", "onclick", "onload", "settimeout", "setinterval",
    "localstorage", "sessionstorage", "fetch", "xmlhttprequest", "datalayer", "gtag", "jquery",
}

TECHNICAL_WORDS_MARKUP = {
    "html", "http", "https", "www", "div", "span", "script", "href", "src", "px", "rgba", "font-size",
    "nbsp", "utf-8", "charset", "viewport", "css", "svg",
}


def get_technical_vocabulary():
    return TECHNICAL_WORDS_JS | TECHNICAL_WORDS_DOM | TECHNICAL_WORDS_MARKUP


def with_technical_vocabulary(func):
    """Decorator that injects the combined technical vocabulary when none is passed."""
    @functools.wraps(func)
    def wrapper(self, text, vocabulary=None, *args, **kwargs):
        if vocabulary is None:
            vocabulary = get_technical_vocabulary()
        return func(self, text, vocabulary, *args, **kwargs)
    return wrapper
