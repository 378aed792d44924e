"""SiteChat — website Q&A chatbot backend."""
