"""HTML pages served by the bot: landing page, OAuth callback and test console."""

from __future__ import annotations

import html
import json

INDEX_PAGE = """
<h1>🤖 Zoom聊天机器人</h1>
<p>机器人正在运行中...</p>
<ul>
    <li><a href="/health">健康检查</a></li>
    <li><a href="/test">测试控制台</a></li>
</ul>
"""

OAUTH_SUCCESS_PAGE = """
<h2>🎉 Zoom机器人授权成功！</h2>
<p>您已成功授权Zoom聊天机器人。</p>
<p>现在可以在Zoom Team Chat中与机器人对话了！</p>
<p><strong>试试发送：</strong> hello 或 help</p>
<br>
<p><em>您可以关闭此页面。</em></p>
"""

OAUTH_FAILURE_PAGE = """
<h2>❌ 授权失败</h2>
<p>授权过程中出现错误，请重试。</p>
<p><a href="javascript:history.back()">返回重试</a></p>
"""

CONSOLE_TOKEN_PLACEHOLDER = "test-token"
QUICK_COMMANDS = ("hello", "help", "time", "ping", "info")

_CONSOLE_TEMPLATE = """<!DOCTYPE html>
<html lang="zh-CN">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Zoom机器人测试控制台</title>
    <style>
        body {{ font-family: -apple-system, 'Segoe UI', Arial, sans-serif; max-width: 800px; margin: 40px auto;
               padding: 20px; background: #f5f5f5; }}
        .container {{ background: white; padding: 30px; border-radius: 8px; box-shadow: 0 2px 10px rgba(0,0,0,0.1); }}
        h1 {{ color: #2d8cff; border-bottom: 2px solid #2d8cff; padding-bottom: 10px; }}
        .section {{ margin: 20px 0; padding: 15px; background: #f8f9fa; border-radius: 5px; }}
        .button {{ background: #2d8cff; color: white; border: none; padding: 8px 16px; border-radius: 4px;
                  cursor: pointer; margin: 5px; }}
        .button:hover {{ background: #1e7ce8; }}
        input, textarea {{ width: 100%; padding: 8px; margin: 5px 0; border: 1px solid #ddd; border-radius: 4px;
                          box-sizing: border-box; }}
        .result {{ margin-top: 15px; padding: 10px; background: #e8f5e8; border-radius: 4px;
                  border-left: 4px solid #28a745; }}
        .error {{ background: #f8e8e8; border-left-color: #dc3545; }}
    </style>
</head>
<body>
<div class="container">
    <h1>🤖 Zoom机器人测试控制台</h1>

    <div class="section">
        <h3>📊 系统状态</h3>
        <button class="button" onclick="checkHealth()">检查健康状态</button>
        <div id="healthResult"></div>
    </div>

    <div class="section">
        <h3>📝 测试Webhook</h3>
        <p>模拟Zoom发送消息到机器人：</p>
        <input type="text" id="testCommand" placeholder="输入命令，如: hello" value="hello">
        <input type="text" id="testUser" placeholder="用户名" value="测试用户">
        <button class="button" onclick="testWebhook()">测试Webhook</button>
        <div id="webhookResult"></div>
    </div>

    <div class="section">
        <h3>💬 测试发送消息</h3>
        <p>直接发送消息到指定用户：</p>
        <input type="text" id="toJid" placeholder="目标用户JID，如: user@xmpp.zoom.us">
        <textarea id="message" rows="3" placeholder="输入要发送的消息"></textarea>
        <button class="button" onclick="testSendMessage()">发送消息</button>
        <div id="sendResult"></div>
    </div>

    <div class="section">
        <h3>🔧 快速命令测试</h3>
        {quick_buttons}
    </div>
</div>

<script>
    const VERIFICATION_TOKEN = {token_literal};

    function show(id, ok, title, body) {{
        const cls = ok ? 'result' : 'result error';
        document.getElementById(id).innerHTML =
            '<div class="' + cls + '"><strong>' + title + '</strong><pre>' + body + '</pre></div>';
    }}

    async function checkHealth() {{
        try {{
            const response = await fetch('/health');
            show('healthResult', true, '✅ 系统状态：', JSON.stringify(await response.json(), null, 2));
        }} catch (error) {{
            show('healthResult', false, '❌ 错误：', error.message);
        }}
    }}

    async function testWebhook() {{
        const cmd = document.getElementById('testCommand').value;
        const userName = document.getElementById('testUser').value;
        try {{
            const response = await fetch('/webhook', {{
                method: 'POST',
                headers: {{ 'Content-Type': 'application/json', 'Authorization': VERIFICATION_TOKEN }},
                body: JSON.stringify({{
                    event: 'bot_notification',
                    payload: {{ cmd: cmd, userName: userName, userJid: 'test@xmpp.zoom.us', robotJid: 'bot@xmpp.zoom.us' }}
                }})
            }});
            show('webhookResult', true, '✅ Webhook响应：', JSON.stringify(await response.json(), null, 2));
        }} catch (error) {{
            show('webhookResult', false, '❌ 错误：', error.message);
        }}
    }}

    async function testSendMessage() {{
        const toJid = document.getElementById('toJid').value;
        const message = document.getElementById('message').value;
        if (!toJid || !message) {{
            alert('请填写目标JID和消息内容');
            return;
        }}
        try {{
            const response = await fetch('/test-send-message', {{
                method: 'POST',
                headers: {{ 'Content-Type': 'application/json' }},
                body: JSON.stringify({{ to_jid: toJid, message: message }})
            }});
            show('sendResult', true, '✅ 发送结果：', JSON.stringify(await response.json(), null, 2));
        }} catch (error) {{
            show('sendResult', false, '❌ 错误：', error.message);
        }}
    }}

    function quickTest(command) {{
        document.getElementById('testCommand').value = command;
        testWebhook();
    }}

    window.onload = checkHealth;
</script>
</body>
</html>
"""


def render_test_console(verification_token: str | None) -> str:
    """Render the test console, wiring its webhook form to the configured token."""
    token = verification_token or CONSOLE_TOKEN_PLACEHOLDER
    quick_buttons = "\n        ".join(
        f'<button class="button" onclick="quickTest(\'{cmd}\')">测试 {html.escape(cmd)}</button>' for cmd in QUICK_COMMANDS
    )
    token_literal = json.dumps(token).replace("<", "\\u003c")
    return _CONSOLE_TEMPLATE.format(quick_buttons=quick_buttons, token_literal=token_literal)
