# src/ui/kv.py
KV = r"""
#:kivy 2.3.0
#:import dp kivy.metrics.dp

<ScoreBoard>:
    orientation: "vertical"
    spacing: dp(8)
    padding: dp(16)
    canvas.before:
        Color:
            rgba: 0.11, 0.12, 0.14, 1
        Rectangle:
            pos: self.pos
            size: self.size

    Label:
        text: "Round " + str(root.round_number)
        font_size: dp(22)
        color: 0.92, 0.95, 1, 1
        size_hint_y: None
        height: dp(36)

    BoxLayout:
        size_hint_y: None
        height: dp(90)
        Label:
            markup: True
            text: "[size=14dp]YOU[/size]\n[b]" + str(root.user_score) + "[/b]"
            font_size: dp(40)
            halign: "center"
            color: 0.24, 0.94, 0.78, 1
        Label:
            markup: True
            text: "[size=14dp]CPU[/size]\n[b]" + str(root.cpu_score) + "[/b]"
            font_size: dp(40)
            halign: "center"
            color: 0.98, 0.55, 0.20, 1

    Label:
        text: "First to " + str(root.win_threshold) + " wins"
        font_size: dp(13)
        color: 0.55, 0.58, 0.64, 1
        size_hint_y: None
        height: dp(24)

    Label:
        text: root.status
        font_size: dp(16)
        color: 0.92, 0.95, 1, 1
        text_size: self.width, None
        halign: "center"

<RootView>:
    orientation: "horizontal"
    spacing: dp(6)
    padding: dp(6)

    # LEFT: Stage (video + countdown + live gesture)
    FloatLayout:
        id: stage
        size_hint_x: 0.68
        canvas.before:
            Color:
                rgba: 0.05, 0.06, 0.08, 1
            Rectangle:
                pos: self.pos
                size: self.size

        VideoFeed:
            id: video
            size_hint: 0.96, 0.8
            pos_hint: {"center_x": 0.5, "top": 0.98}
            fit_mode: "contain"

        CountdownBanner:
            id: countdown
            text: ""
            bold: True
            color: 1, 0.92, 0.3, 1
            size_hint: 1, None
            height: dp(80)
            pos_hint: {"center_x": 0.5, "center_y": 0.6}

        GestureBadge:
            id: badge
            size_hint: None, None
            size: dp(220), dp(44)
            pos_hint: {"x": 0.02, "y": 0.03}

        ResetButton:
            id: reset
            text: "New"
            size_hint: None, None
            size: dp(52), dp(52)
            pos_hint: {"right": 0.98, "y": 0.02}
            on_release: app.reset_match()

    # RIGHT: score column
    ScoreBoard:
        id: scoreboard
        size_hint_x: 0.32
"""
