"""State/store layer.

Stores here are the single writers of their state. Actions come in through
a :class:`~accountsettings.state.dispatcher.Dispatcher` (or a direct
``dispatch`` call) and every published state version notifies observers.
"""
