"""Route view builders."""
