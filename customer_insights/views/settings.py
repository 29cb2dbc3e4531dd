"""
Settings page.

Every tab edits one preferences dataclass. Saving runs through the simulated
``save_settings`` action and, on success, replaces the copy held in
``st.session_state["settings"]``; nothing survives a browser reload.
"""

import copy
from dataclasses import replace

import streamlit as st

from ..actions import import_customers, run_action, save_settings
from ..auth import PAGES, ROLES, can_edit
from ..preferences import (
    ACCESS_EXPIRY,
    API_VERSIONS,
    AUTH_METHODS,
    COLOR_SCHEMES,
    DELIVERY_METHODS,
    DIGEST_FREQUENCIES,
    EXPORT_FORMATS,
    EXPORT_SCOPES,
    FONT_SIZES,
    IMPORT_TYPES,
    ORIENTATIONS,
    PAGE_SIZES,
    PDF_TEMPLATES,
    RATE_LIMITS,
    REFRESH_INTERVALS,
    RETENTION_PERIODS,
    TOKEN_EXPIRY,
    WEBHOOK_EVENTS,
    default_settings,
    generate_api_key,
    settings_payload,
)

THEMES = ("light", "dark", "system")
WEEKDAYS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def current_settings() -> dict:
    if "settings" not in st.session_state:
        st.session_state["settings"] = default_settings()
    return st.session_state["settings"]


def commit(section: str, updated) -> bool:
    with st.spinner("Saving..."):
        result = run_action(save_settings(section, settings_payload(updated)))
    if result.success:
        current_settings()[section] = updated
        st.toast(f"{section.title()} settings saved")
        return True
    st.error(result.error)
    return False


def changed(settings, method: str, *args):
    """Return a deep copy of ``settings`` with ``method(*args)`` applied; the original is untouched."""
    updated = copy.deepcopy(settings)
    getattr(updated, method)(*args)
    return updated


def _index(options, value) -> int:
    options = list(options)
    return options.index(value) if value in options else 0


def profile_tab(settings):
    with st.form("settings_profile"):
        col1, col2 = st.columns(2)
        name = col1.text_input("Full Name", settings.name)
        email = col2.text_input("Email Address", settings.email)
        phone = col1.text_input("Phone Number", settings.phone)
        job_title = col2.text_input("Job Title", settings.job_title)
        department = st.text_input("Department", settings.department)
        if st.form_submit_button("Save profile"):
            commit(
                "profile",
                replace(
                    settings, name=name, email=email, phone=phone, job_title=job_title, department=department
                ),
            )


def appearance_tab(settings):
    with st.form("settings_appearance"):
        theme = st.radio("Theme", THEMES, index=_index(THEMES, settings.theme), horizontal=True)
        col1, col2 = st.columns(2)
        color_scheme = col1.selectbox("Color Scheme", COLOR_SCHEMES, index=_index(COLOR_SCHEMES, settings.color_scheme))
        font_size = col2.selectbox("Font Size", FONT_SIZES, index=_index(FONT_SIZES, settings.font_size))
        default_view = col1.selectbox("Default View", PAGES[:4], index=_index(PAGES[:4], settings.default_view))
        reduced_motion = col2.checkbox("Reduced motion", settings.reduced_motion)
        high_contrast = col2.checkbox("High contrast", settings.high_contrast)
        sidebar_collapsed = col1.checkbox("Collapse sidebar by default", settings.sidebar_collapsed)
        compact_cards = col1.checkbox("Compact cards", settings.compact_cards)
        if st.form_submit_button("Save appearance"):
            commit(
                "appearance",
                replace(
                    settings,
                    theme=theme,
                    color_scheme=color_scheme,
                    font_size=font_size,
                    default_view=default_view,
                    reduced_motion=reduced_motion,
                    high_contrast=high_contrast,
                    sidebar_collapsed=sidebar_collapsed,
                    compact_cards=compact_cards,
                ),
            )


def notifications_tab(settings):
    with st.form("settings_notifications"):
        col1, col2, col3 = st.columns(3)
        with col1:
            st.markdown("**Email**")
            email_notifications = st.checkbox("Email notifications", settings.email_notifications)
            email_digest = st.checkbox("Digest", settings.email_digest)
            email_alerts = st.checkbox("Alerts", settings.email_alerts)
            email_reports = st.checkbox("Reports", settings.email_reports)
        with col2:
            st.markdown("**Push**")
            push_notifications = st.checkbox("Push notifications", settings.push_notifications)
            push_high_priority_only = st.checkbox("High priority only", settings.push_high_priority_only)
            push_sound = st.checkbox("Sound", settings.push_sound)
        with col3:
            st.markdown("**In-app**")
            in_app_notifications = st.checkbox("In-app notifications", settings.in_app_notifications)
            in_app_toast = st.checkbox("Toasts", settings.in_app_toast)
            in_app_badge = st.checkbox("Badge", settings.in_app_badge)

        st.markdown("**Events**")
        event_columns = st.columns(3)
        events = {
            event: event_columns[i % 3].checkbox(event.replace("_", " ").title(), enabled, key=f"event_{event}")
            for i, (event, enabled) in enumerate(settings.events.items())
        }

        st.markdown("**Schedule**")
        col1, col2, col3 = st.columns(3)
        quiet_hours = col1.checkbox("Quiet hours", settings.quiet_hours)
        quiet_start = col2.text_input("Quiet from", settings.quiet_start)
        quiet_end = col3.text_input("Quiet until", settings.quiet_end)
        notification_days = st.multiselect("Notification days", WEEKDAYS, default=settings.notification_days)
        digest_frequency = st.selectbox(
            "Digest frequency", DIGEST_FREQUENCIES, index=_index(DIGEST_FREQUENCIES, settings.digest_frequency)
        )
        if st.form_submit_button("Save notifications"):
            commit(
                "notifications",
                replace(
                    settings,
                    email_notifications=email_notifications,
                    email_digest=email_digest,
                    email_alerts=email_alerts,
                    email_reports=email_reports,
                    push_notifications=push_notifications,
                    push_high_priority_only=push_high_priority_only,
                    push_sound=push_sound,
                    in_app_notifications=in_app_notifications,
                    in_app_toast=in_app_toast,
                    in_app_badge=in_app_badge,
                    events=events,
                    quiet_hours=quiet_hours,
                    quiet_start=quiet_start,
                    quiet_end=quiet_end,
                    notification_days=notification_days,
                    digest_frequency=digest_frequency,
                ),
            )


def access_tab(settings):
    col1, col2 = st.columns([3, 1])
    query = col1.text_input("Search team members")
    role = col2.selectbox("Role", ("all",) + ROLES)
    for member in settings.search(query, role):
        name_col, role_col, action_col = st.columns([3, 1, 1])
        name_col.markdown(f"**{member.name}** · {member.email}")
        role_col.write(member.role)
        if action_col.button("Remove", key=f"remove_{member.email}"):
            commit("access", changed(settings, "remove_member", member.email))
            st.rerun()

    with st.form("settings_add_member", clear_on_submit=True):
        st.markdown("**Add team member**")
        col1, col2 = st.columns(2)
        name = col1.text_input("Name")
        email = col2.text_input("Email")
        new_role = col1.selectbox("Role", ROLES, key="new_member_role")
        expiry = col2.selectbox("Access expires", ACCESS_EXPIRY, index=_index(ACCESS_EXPIRY, "never"))
        if st.form_submit_button("Add member"):
            try:
                updated = changed(settings, "add_member", name, email, new_role, expiry)
            except ValueError as e:
                st.error(str(e))
            else:
                commit("access", updated)

    with st.form("settings_security"):
        two_factor = st.checkbox("Require two-factor authentication", settings.two_factor)
        password_expiry = st.checkbox("Expire passwords every 90 days", settings.password_expiry)
        session_timeout = st.checkbox("Sign out idle sessions", settings.session_timeout)
        if st.form_submit_button("Save security"):
            commit(
                "access",
                replace(
                    settings,
                    two_factor=two_factor,
                    password_expiry=password_expiry,
                    session_timeout=session_timeout,
                ),
            )


def api_tab(settings):
    with st.form("settings_api"):
        col1, col2 = st.columns(2)
        base_url = col1.text_input("API Base URL", settings.base_url)
        version = col2.selectbox("API Version", API_VERSIONS, index=_index(API_VERSIONS, settings.version))
        rate_limit = col1.selectbox(
            "Rate Limit",
            list(RATE_LIMITS),
            index=_index(RATE_LIMITS, settings.rate_limit),
            format_func=RATE_LIMITS.get,
        )
        auth_method = col2.selectbox(
            "Authentication",
            list(AUTH_METHODS),
            index=_index(AUTH_METHODS, settings.auth_method),
            format_func=AUTH_METHODS.get,
        )
        token_expiry = col1.selectbox("Token Expiry", TOKEN_EXPIRY, index=_index(TOKEN_EXPIRY, settings.token_expiry))
        request_logging = col2.checkbox("Request logging", settings.request_logging)
        compression = col2.checkbox("Response compression", settings.compression)
        webhook_retries = col2.checkbox("Retry failed webhooks", settings.webhook_retries)
        if st.form_submit_button("Save API settings"):
            commit(
                "api",
                replace(
                    settings,
                    base_url=base_url,
                    version=version,
                    rate_limit=rate_limit,
                    auth_method=auth_method,
                    token_expiry=token_expiry,
                    request_logging=request_logging,
                    compression=compression,
                    webhook_retries=webhook_retries,
                ),
            )

    st.text_input("API Key", settings.api_key, type="password", disabled=True)
    if st.button("Regenerate API key"):
        commit("api", replace(settings, api_key=generate_api_key()))
        st.rerun()

    st.markdown("**Webhooks**")
    for webhook in settings.webhooks:
        st.markdown(f"- `{webhook.url}` · {', '.join(webhook.events)}")
    with st.form("settings_webhook", clear_on_submit=True):
        url = st.text_input("Endpoint URL")
        events = st.multiselect("Events", WEBHOOK_EVENTS)
        if st.form_submit_button("Add webhook"):
            try:
                updated = changed(settings, "add_webhook", url, events)
            except ValueError as e:
                st.error(str(e))
            else:
                commit("api", updated)


def import_panel(settings, user):
    st.markdown("**Import Data**")
    allowed = can_edit(user)
    uploaded = st.file_uploader(
        "Upload File", type=["csv", "xlsx"], disabled=not allowed, help="Supported formats: CSV, Excel (.xlsx)"
    )
    if not allowed:
        st.error("Permission required. You need admin or sales permissions to import data.")
        return
    if st.button("Import", disabled=uploaded is None):
        bar = st.progress(0, text="Importing data... 0%")
        result = run_action(
            import_customers(
                uploaded.name,
                settings.import_type,
                on_progress=lambda done: bar.progress(done / 100, text=f"Importing data... {done}%"),
            )
        )
        if result.success:
            st.toast(f"Imported {uploaded.name}")
        else:
            st.error(result.error)


def data_tab(settings, user):
    import_panel(settings, user)
    with st.form("settings_data"):
        col1, col2 = st.columns(2)
        import_type = col1.selectbox(
            "Import mode",
            list(IMPORT_TYPES),
            index=_index(IMPORT_TYPES, settings.import_type),
            format_func=IMPORT_TYPES.get,
        )
        export_format = col2.selectbox(
            "Export format", EXPORT_FORMATS, index=_index(EXPORT_FORMATS, settings.export_format)
        )
        export_scope = col1.selectbox(
            "Export scope",
            list(EXPORT_SCOPES),
            index=_index(EXPORT_SCOPES, settings.export_scope),
            format_func=EXPORT_SCOPES.get,
        )
        data_retention = col2.selectbox(
            "Data retention (days)", RETENTION_PERIODS, index=_index(RETENTION_PERIODS, settings.data_retention)
        )
        auto_refresh = col1.checkbox("Auto refresh", settings.auto_refresh)
        refresh_interval = col2.selectbox(
            "Refresh interval (minutes)",
            REFRESH_INTERVALS,
            index=_index(REFRESH_INTERVALS, settings.refresh_interval),
        )
        if st.form_submit_button("Save data settings"):
            commit(
                "data",
                replace(
                    settings,
                    import_type=import_type,
                    export_format=export_format,
                    export_scope=export_scope,
                    data_retention=data_retention,
                    auto_refresh=auto_refresh,
                    refresh_interval=refresh_interval,
                ),
            )


def export_tab(settings):
    with st.form("settings_export"):
        col1, col2 = st.columns(2)
        default_format = col1.selectbox(
            "Default format", EXPORT_FORMATS, index=_index(EXPORT_FORMATS, settings.default_format)
        )
        available_formats = col2.multiselect(
            "Available formats", EXPORT_FORMATS, default=settings.available_formats
        )
        include_headers = col1.checkbox("Include headers", settings.include_headers)
        include_metadata = col1.checkbox("Include metadata", settings.include_metadata)
        preserve_formatting = col1.checkbox("Preserve formatting", settings.preserve_formatting)

        st.markdown("**PDF**")
        col1, col2, col3 = st.columns(3)
        pdf_template = col1.selectbox("Template", PDF_TEMPLATES, index=_index(PDF_TEMPLATES, settings.pdf_template))
        page_size = col2.selectbox("Page size", PAGE_SIZES, index=_index(PAGE_SIZES, settings.page_size))
        orientation = col3.selectbox("Orientation", ORIENTATIONS, index=_index(ORIENTATIONS, settings.orientation))
        include_logo = col1.checkbox("Include logo", settings.include_logo)
        company_name = col2.text_input("Company name", settings.company_name)
        primary_color = col3.color_picker("Primary color", settings.primary_color)
        footer_text = st.text_input("Footer text", settings.footer_text)

        st.markdown("**Delivery**")
        col1, col2 = st.columns(2)
        delivery_method = col1.selectbox(
            "Delivery method", DELIVERY_METHODS, index=_index(DELIVERY_METHODS, settings.delivery_method)
        )
        default_recipients = col2.text_input("Default recipients (comma separated)", settings.default_recipients)
        notify_on_export = col1.checkbox("Notify when export completes", settings.notify_on_export)

        if st.form_submit_button("Save export preferences"):
            if default_format not in available_formats:
                st.error("The default format must be one of the available formats.")
            else:
                commit(
                    "export",
                    replace(
                        settings,
                        default_format=default_format,
                        available_formats=available_formats,
                        include_headers=include_headers,
                        include_metadata=include_metadata,
                        preserve_formatting=preserve_formatting,
                        pdf_template=pdf_template,
                        page_size=page_size,
                        orientation=orientation,
                        include_logo=include_logo,
                        company_name=company_name,
                        primary_color=primary_color,
                        footer_text=footer_text,
                        delivery_method=delivery_method,
                        default_recipients=default_recipients,
                        notify_on_export=notify_on_export,
                    ),
                )


def render(user):
    st.subheader("Settings")
    settings = current_settings()
    tabs = st.tabs(["Profile", "Appearance", "Notifications", "Access Control", "API", "Data", "Export"])
    with tabs[0]:
        profile_tab(settings["profile"])
    with tabs[1]:
        appearance_tab(settings["appearance"])
    with tabs[2]:
        notifications_tab(settings["notifications"])
    with tabs[3]:
        access_tab(settings["access"])
    with tabs[4]:
        api_tab(settings["api"])
    with tabs[5]:
        data_tab(settings["data"], user)
    with tabs[6]:
        export_tab(settings["export"])
