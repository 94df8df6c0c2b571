import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from i18n_helper.core.i18n import I18N
from i18n_helper.features.lookup import handlers
from i18n_helper.store.models import ProjectConfig
from i18n_helper.store.service import LocalizationService


@pytest.fixture(autouse=True)
def locales():
    I18N.load_locales()


@pytest.fixture
async def app(workspace, projects):
    service = LocalizationService(projects, str(workspace))
    await service.start()
    application = SimpleNamespace(bot_data={handlers.SERVICE_KEY: service})
    yield application
    await service.stop()


def make_update(text):
    message = SimpleNamespace(text=text, reply_text=AsyncMock())
    user = SimpleNamespace(id=1, language_code="en", first_name="Ann")
    return SimpleNamespace(effective_message=message, effective_user=user), message


async def test_tr_renders_table(app):
    update, message = make_update("/tr greet.hello")
    context = SimpleNamespace(application=app, args=["greet.hello"])

    await handlers.translate(update, context)

    text = message.reply_text.await_args.args[0]
    assert "<b>greet.hello</b>" in text
    assert "[en]  Hi" in text
    assert "[fr]  Salut" in text


async def test_tr_without_match(app):
    update, message = make_update("/tr nope.key")
    await handlers.translate(update, SimpleNamespace(application=app, args=["nope.key"]))
    assert "No translations found" in message.reply_text.await_args.args[0]


async def test_tr_without_service():
    update, message = make_update("/tr greet.hello")
    await handlers.translate(update, SimpleNamespace(application=SimpleNamespace(bot_data={}), args=["x"]))
    assert "not found" in message.reply_text.await_args.args[0]


async def test_quoted_key_in_text(app):
    update, message = make_update("what is t('greet.hello') here?")
    await handlers.on_text(update, SimpleNamespace(application=app))
    assert "Salut" in message.reply_text.await_args.args[0]


async def test_text_without_key_is_silent(app):
    update, message = make_update("hello there")
    await handlers.on_text(update, SimpleNamespace(application=app))
    message.reply_text.assert_not_awaited()


async def test_projects_lists_loaded_locales(app):
    update, message = make_update("/projects")
    await handlers.projects(update, SimpleNamespace(application=app))
    assert "<b>app</b>: en, fr" in message.reply_text.await_args.args[0]


async def test_start_service_without_projects_notifies_owners(monkeypatch):
    notify = AsyncMock()
    monkeypatch.setattr(handlers, "notify_owners", notify)
    application = SimpleNamespace(bot_data={}, bot=object())
    cfg = SimpleNamespace(I18N_PROJECTS=[], workspace_root="/tmp", I18N_FLATTEN=False, WATCH_INTERVAL=1.0)

    assert await handlers.start_service(application, cfg) is None
    assert handlers.SERVICE_KEY not in application.bot_data
    notify.assert_awaited_once()


async def test_stop_service_clears_bot_data(app):
    await handlers.stop_service(app)
    assert handlers.SERVICE_KEY not in app.bot_data


async def test_projects_shows_unavailable_directory(workspace, projects):
    service = LocalizationService(projects + [ProjectConfig(name="gone", path="not/here")], str(workspace))
    await service.start()
    try:
        update, message = make_update("/projects")
        application = SimpleNamespace(bot_data={handlers.SERVICE_KEY: service})
        await handlers.projects(update, SimpleNamespace(application=application))
        text = message.reply_text.await_args.args[0]
        assert "<b>app</b>: en, fr" in text
        assert "<b>gone</b>: (none loaded) (directory unavailable:" in text
    finally:
        await service.stop()


async def test_concurrent_reloads_leave_one_watcher(workspace, projects, monkeypatch):
    created = []
    build = handlers.build_service

    def recording_build(cfg):
        service = build(cfg)
        created.append(service)
        return service

    monkeypatch.setattr(handlers, "build_service", recording_build)
    cfg = SimpleNamespace(
        I18N_PROJECTS=projects, workspace_root=str(workspace), I18N_FLATTEN=False, WATCH_INTERVAL=60.0
    )
    application = SimpleNamespace(bot_data={}, bot=object())

    await asyncio.gather(
        handlers.restart_service(application, lambda: cfg),
        handlers.restart_service(application, lambda: cfg),
    )
    running = [s for s in created if s.watcher.running]
    assert len(created) == 2
    assert running == [handlers.get_service(application)]

    await handlers.stop_service(application)
    assert not any(s.watcher.running for s in created)


async def test_start_service_replaces_and_stops_previous(workspace, projects):
    cfg = SimpleNamespace(
        I18N_PROJECTS=projects, workspace_root=str(workspace), I18N_FLATTEN=False, WATCH_INTERVAL=60.0
    )
    application = SimpleNamespace(bot_data={}, bot=object())

    first = await handlers.start_service(application, cfg)
    second = await handlers.start_service(application, cfg)
    try:
        assert handlers.get_service(application) is second
        assert not first.watcher.running
        assert second.watcher.running
    finally:
        await handlers.stop_service(application)


async def test_restart_with_invalid_settings_stops_service(app):
    def broken():
        raise ValueError("bad I18N_PROJECTS")

    with pytest.raises(ValueError):
        await handlers.restart_service(app, broken)
    assert handlers.get_service(app) is None
